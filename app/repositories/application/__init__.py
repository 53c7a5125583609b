from app.repositories.application.application_repository import (
    AcceptedApplicationRepository,
    ApplicationRepository,
)

__all__ = ["ApplicationRepository", "AcceptedApplicationRepository"]
