"""Device-local sign-in state kept under ``userToken`` / ``userData``."""
import logging
import re
import secrets
import time
from typing import Optional

from app.schemas.store import UserProfile
from app.services.errors import NotFoundError, StorageError, ValidationError
from app.storage.kv import USER_DATA_KEY, USER_TOKEN_KEY, KeyValueStore

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6
PROFILE_FIELDS = ("name", "email", "phone", "address", "avatar")


def validate_email(email: str) -> None:
    if not EMAIL_RE.match(email or ""):
        raise ValidationError("Please enter a valid email address")


class Session:
    def __init__(self, store: KeyValueStore):
        self.store = store

    def _store_session(self, token: str, user: UserProfile) -> UserProfile:
        self.store.set(USER_TOKEN_KEY, token)
        self.store.set(USER_DATA_KEY, user.to_store())
        return user

    def register(self, name, email, phone, password, confirm_password) -> UserProfile:
        if not all([name, email, phone, password, confirm_password]):
            raise ValidationError("Please fill in all fields")
        if password != confirm_password:
            raise ValidationError("Passwords do not match")
        validate_email(email)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        user = UserProfile(id=str(int(time.time() * 1000)), name=name, email=email, phone=phone)
        logger.info("Registered local profile %s", user.id)
        return self._store_session(secrets.token_urlsafe(24), user)

    def login(self, email, password) -> UserProfile:
        if not email or not password:
            raise ValidationError("Please fill in all required fields")
        validate_email(email)

        user = self.current_user()
        if user is None or user.email != email:
            user = UserProfile(id=str(int(time.time() * 1000)), name="User", email=email)
        return self._store_session(secrets.token_urlsafe(24), user)

    def sign_in(self, token: str, user: UserProfile) -> UserProfile:
        """Adopt a session issued by the server after an OAuth exchange."""
        if not token:
            raise ValidationError("Missing session token")
        return self._store_session(token, user)

    def current_user(self) -> Optional[UserProfile]:
        try:
            if not self.store.get(USER_TOKEN_KEY):
                return None
            data = self.store.get(USER_DATA_KEY)
        except StorageError as e:
            logger.warning("Session unreadable, treating as signed out: %s", e)
            return None
        return UserProfile.model_validate(data) if data else None

    def update_profile(self, **fields) -> UserProfile:
        user = self.current_user()
        if user is None:
            raise NotFoundError("Not signed in")
        changes = {k: v for k, v in fields.items() if k in PROFILE_FIELDS and v is not None}
        if "email" in changes:
            validate_email(changes["email"])
        if "name" in changes and not changes["name"].strip():
            raise ValidationError("Please enter your name")
        updated = user.model_copy(update=changes)
        self.store.set(USER_DATA_KEY, updated.to_store())
        return updated

    def logout(self) -> None:
        self.store.remove(USER_TOKEN_KEY)
        self.store.remove(USER_DATA_KEY)
