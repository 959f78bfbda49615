"""Database Package — declarative Base shared by models and migrations."""
