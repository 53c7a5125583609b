from app.repositories.base.base_repository import BaseRepository
from app.repositories.base.repository_factory import RepositoryFactory

__all__ = ["BaseRepository", "RepositoryFactory"]
