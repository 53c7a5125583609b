from app.schemas.common.base import BaseDBSchema, BaseSchema, TimestampMixin, UUIDMixin

__all__ = ["BaseSchema", "BaseDBSchema", "TimestampMixin", "UUIDMixin"]
