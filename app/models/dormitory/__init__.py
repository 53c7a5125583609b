from app.models.dormitory.dormitory import Dormitory

__all__ = ["Dormitory"]
