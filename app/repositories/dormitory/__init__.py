from app.repositories.dormitory.dormitory_repository import DormitoryRepository

__all__ = ["DormitoryRepository"]
