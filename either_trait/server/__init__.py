"""either-trait FastAPI Server"""
from .app import app

__all__ = ['app']
