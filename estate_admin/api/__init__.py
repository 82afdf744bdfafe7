"""
Estate Admin backend API Package
"""
from .client import BackendClient, BackendAPIError
from .config import Config

__all__ = ['BackendClient', 'BackendAPIError', 'Config']
