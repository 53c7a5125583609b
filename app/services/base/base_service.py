"""
Base service class providing common functionality for all services.
"""

from typing import Optional, Dict, Any

from app.config.settings import Settings, settings as default_settings
from app.core.exceptions import BaseAppException, StoreUnavailableError
from app.core.logging import get_logger
from app.repositories.base.repository_factory import RepositoryFactory
from app.services.base.service_result import (
    ServiceResult,
    ServiceError,
    ErrorCode,
    ErrorSeverity,
)


class BaseService:
    """
    Base service with common behaviors:
    - Shared logger, repositories and settings
    - Consistent error handling via ServiceResult
    """

    def __init__(self, repositories: RepositoryFactory, config: Optional[Settings] = None):
        """
        Initialize base service.

        Args:
            repositories: Repository factory bound to the request session
            config: Settings override, the process settings by default
        """
        self.repositories = repositories
        self.config: Settings = config or default_settings
        self._logger = get_logger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    # -------------------------------------------------------------------------
    # Exception & Error Handling
    # -------------------------------------------------------------------------

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
        additional_context: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Convert exception to a ServiceResult failure with logging.

        Application exceptions keep their error code and message. Input
        errors are logged at WARNING, store failures at ERROR, anything
        else is logged with its traceback and reported as INTERNAL_ERROR.

        Args:
            exception: The caught exception
            operation: Description of the operation that failed
            entity_ref: Reference to the entity involved (ID, name, etc.)
            additional_context: Extra context for logging/debugging

        Returns:
            ServiceResult with failure status and error details
        """
        context = {
            "operation": operation,
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
            "exception_type": type(exception).__name__,
        }
        if additional_context:
            context.update(additional_context)

        if isinstance(exception, StoreUnavailableError):
            self._logger.error(f"Store unavailable during {operation}", extra=context)
            return ServiceResult.failure(
                ServiceError.from_app_exception(exception, ErrorSeverity.CRITICAL)
            )

        if isinstance(exception, BaseAppException):
            self._logger.warning(f"Rejected {operation}: {exception.message}", extra=context)
            return ServiceResult.failure(ServiceError.from_app_exception(exception))

        self._logger.error(
            f"Error during {operation}: {exception}",
            exc_info=True,
            extra=context,
        )
        return ServiceResult.failure(
            ServiceError(
                code=ErrorCode.INTERNAL_ERROR,
                message=f"Failed to {operation}",
                details={
                    "entity_ref": context["entity_ref"],
                    "exception_type": context["exception_type"],
                },
                severity=ErrorSeverity.CRITICAL,
            )
        )

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def _log_operation(
        self,
        operation: str,
        entity_ref: Optional[Any] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log service operation with standardized format.

        Args:
            operation: Description of the operation
            entity_ref: Reference to the entity involved
            extra: Additional context to log
        """
        context = {"entity_ref": str(entity_ref) if entity_ref else None}
        if extra:
            context.update(extra)

        self._logger.info(f"Operation: {operation}", extra=context)
