"""Simple User API: a FastAPI + MongoDB CRUD service for users."""

__version__ = "1.0.0"
