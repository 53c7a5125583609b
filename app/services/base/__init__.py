from app.services.base.base_service import BaseService
from app.services.base.service_result import (
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)

__all__ = ["BaseService", "ServiceResult", "ServiceError", "ErrorCode", "ErrorSeverity"]
