"""
Authentication package.
"""

from .auth_service import AuthService, AuthResult, auth_service

__all__ = [
    "AuthService",
    "AuthResult",
    "auth_service",
]
