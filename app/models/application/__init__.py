from app.models.application.application import AcceptedApplication, Application

__all__ = ["Application", "AcceptedApplication"]
