"""Student dormitory open-data service."""
