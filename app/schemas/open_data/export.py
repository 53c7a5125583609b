"""
Export request and result schemas.
"""

from __future__ import annotations

from pydantic import ConfigDict, Field

from app.schemas.common.base import BaseSchema

__all__ = ["ExportRequest", "ExportResult"]


class ExportRequest(BaseSchema):
    """
    Dataset export request.

    Names are validated by the export service so unknown datasets and
    formats surface with their own error kinds.
    """

    dataset: str = Field(..., examples=["rooms"])
    format: str = Field(default="json", examples=["json", "csv"])


class ExportResult(BaseSchema):
    """Serialized dataset; ``content`` is kept byte-for-byte."""

    model_config = ConfigDict(str_strip_whitespace=False)

    dataset: str
    format: str
    media_type: str
    filename: str
    content: str
