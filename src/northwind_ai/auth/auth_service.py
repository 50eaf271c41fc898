"""
Authentication Service

Handles user registration, login, and signed token management.
"""

import base64
import hashlib
import hmac
import json
import logging
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..config import get_auth_secret, get_token_expiry_hours
from ..database import UserRepository


logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 120_000


@dataclass
class AuthResult:
    """Result of authentication operation."""
    success: bool
    user_id: Optional[str] = None
    token: Optional[str] = None
    name: Optional[str] = None
    error: Optional[str] = None


class AuthService:
    """Authentication service for user management."""

    def __init__(self, user_repo: Optional[UserRepository] = None):
        self.user_repo = user_repo or UserRepository()

    def register(self, email: str, password: str, name: str) -> AuthResult:
        """Register a new user."""
        # Validate input
        if not email or '@' not in email:
            return AuthResult(success=False, error="Invalid email address")

        if not password or len(password) < 6:
            return AuthResult(success=False, error="Password must be at least 6 characters")

        if not name or len(name) < 2:
            return AuthResult(success=False, error="Name must be at least 2 characters")

        if self.user_repo.get_by_email(email):
            return AuthResult(success=False, error="Email already registered")

        user_id = str(uuid.uuid4())
        password_hash = self._hash_password(password)

        if self.user_repo.create(user_id, email, password_hash, name):
            token = self._create_token(user_id, email.lower(), name)
            logger.info(f"Registered user {user_id}")
            return AuthResult(success=True, user_id=user_id, token=token, name=name)

        return AuthResult(success=False, error="Failed to create user")

    def login(self, email: str, password: str) -> AuthResult:
        """Login an existing user."""
        if not email or not password:
            return AuthResult(success=False, error="Email and password required")

        user = self.user_repo.get_by_email(email)
        if not user or not self._verify_password(password, user['password_hash']):
            logger.warning("Failed login attempt")
            return AuthResult(success=False, error="Invalid email or password")

        token = self._create_token(user['id'], user['email'], user['name'])
        return AuthResult(success=True, user_id=user['id'], token=token, name=user['name'])

    def verify_token(self, token: str) -> Optional[dict]:
        """Verify a token and return its payload if valid."""
        parts = token.split(".")
        if len(parts) != 3:
            return None

        expected_signature = self._sign(f"{parts[0]}.{parts[1]}")
        if not hmac.compare_digest(parts[2].encode(), expected_signature.encode()):
            return None

        try:
            payload = json.loads(_b64decode(parts[1]))
            if datetime.fromisoformat(payload['exp']) < datetime.now():
                return None
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Token verification error: {e}")
            return None

        return payload

    def get_user(self, user_id: str) -> Optional[dict]:
        """Get user by ID, without the password hash."""
        user = self.user_repo.get_by_id(user_id)
        if user:
            del user['password_hash']
            return user
        return None

    def _hash_password(self, password: str) -> str:
        """Hash password with PBKDF2-SHA256 and a random salt."""
        salt = secrets.token_hex(16)
        digest = hashlib.pbkdf2_hmac(
            "sha256", password.encode(), salt.encode(), PBKDF2_ITERATIONS
        ).hex()
        return f"{salt}${digest}"

    def _verify_password(self, password: str, stored: str) -> bool:
        salt, _, digest = stored.partition("$")
        candidate = hashlib.pbkdf2_hmac(
            "sha256", password.encode(), salt.encode(), PBKDF2_ITERATIONS
        ).hex()
        return hmac.compare_digest(candidate, digest)

    def _create_token(self, user_id: str, email: str, name: str) -> str:
        """Create a signed token."""
        header = {"alg": "HS256", "typ": "JWT"}
        now = datetime.now()
        payload = {
            "sub": user_id,
            "email": email,
            "name": name,
            "exp": (now + timedelta(hours=get_token_expiry_hours())).isoformat(),
            "iat": now.isoformat(),
        }

        header_b64 = _b64encode(json.dumps(header))
        payload_b64 = _b64encode(json.dumps(payload))
        signature = self._sign(f"{header_b64}.{payload_b64}")

        return f"{header_b64}.{payload_b64}.{signature}"

    def _sign(self, data: str) -> str:
        """Create HMAC-SHA256 signature."""
        digest = hmac.new(get_auth_secret().encode(), data.encode(), hashlib.sha256).digest()
        return base64.urlsafe_b64encode(digest).decode().rstrip("=")


def _b64encode(data: str) -> str:
    return base64.urlsafe_b64encode(data.encode()).decode().rstrip("=")


def _b64decode(data: str) -> str:
    padding = -len(data) % 4
    return base64.urlsafe_b64decode(data + "=" * padding).decode('utf-8')


# Global instance
auth_service = AuthService()
