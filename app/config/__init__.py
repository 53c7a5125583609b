"""
Configuration package for the dormitory open-data service.

Contains environment settings and the logging configuration.
"""

from app.config.settings import Settings, get_settings, settings

__all__ = ['Settings', 'get_settings', 'settings']
