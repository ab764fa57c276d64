"""Authentication, session and profile management."""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from storefront.api.client import StorefrontClient
from storefront.models import User
from storefront.storage import SessionStore

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PROFILE_FIELDS = ("username", "nombre", "email", "direccion", "ciudad", "cp")


class AuthenticationRequiredError(RuntimeError):
    """Raised when an operation needs a signed-in user."""

    def __init__(self, message: str = "Usuario no autenticado. Por favor, inicia sesión.") -> None:
        super().__init__(message)


class ProfileValidationError(ValueError):
    """Raised when profile form data cannot be submitted."""


def build_profile_update(form: Mapping[str, Any]) -> dict[str, Any]:
    """
    Validate profile form data and return the payload for ``PUT /users/{id}``.

    Username and email are mandatory, the email must look like an address and
    the password is only sent when the user typed one.
    """

    username = str(form.get("username") or "").strip()
    email = str(form.get("email") or "").strip()
    if not username or not email:
        raise ProfileValidationError("Usuario y email son obligatorios")
    if not EMAIL_PATTERN.match(email):
        raise ProfileValidationError("Por favor, ingresa un email válido")

    payload: dict[str, Any] = {field: form.get(field) or "" for field in PROFILE_FIELDS}
    payload["username"] = username
    payload["email"] = email

    password = form.get("password")
    if isinstance(password, str) and password.strip():
        payload["password"] = password
    return payload


def _unwrap_user(response: Any) -> User:
    if isinstance(response, Mapping) and isinstance(response.get("user"), Mapping):
        response = response["user"]
    return User.model_validate(response)


class AuthService:
    """Keeps the signed-in user in memory and mirrors it to the session store."""

    def __init__(self, client: StorefrontClient, store: SessionStore) -> None:
        self._client = client
        self._store = store
        self._current_user: User | None = None
        client.set_token_provider(self.get_token)
        client.set_unauthorized_hook(self.logout)

    @property
    def current_user(self) -> User | None:
        return self._current_user

    async def restore(self) -> User | None:
        """Load a previously stored session, if any."""

        self._current_user = await self._store.load()
        logger.info(
            "Session restored for %s",
            self._current_user.username if self._current_user else "nobody",
        )
        return self._current_user

    async def register(self, user_data: Mapping[str, Any]) -> User:
        """Create a new account. The new user is not signed in."""

        logger.info("Registering user %s", user_data.get("username"))
        response = await self._client.request_json("POST", "/users/register", json_body=dict(user_data))
        return _unwrap_user(response)

    async def login(self, username: str, password: str) -> User:
        """Sign in and persist the session when the backend issues a token."""

        response = await self._client.request_json(
            "POST",
            "/users/login",
            json_body={"username": username, "password": password},
        )
        user = _unwrap_user(response)
        if user.token:
            await self._store.save(user)
            logger.info("User %s (id=%s, role=%s) signed in", user.username, user.id, user.role)
        else:
            logger.warning("Login response for %s carried no token; session not stored", username)
        self._current_user = user
        return user

    async def logout(self) -> None:
        """Forget the current user and remove the stored session."""

        if self._current_user:
            logger.info("Signing out %s", self._current_user.username)
        await self._store.clear()
        self._current_user = None

    async def get_profile(self) -> User:
        """Fetch the profile of the signed-in user from the backend."""

        self.require_user()
        response = await self._client.request_json("GET", "/users/profile")
        return _unwrap_user(response)

    async def update_user(self, user_id: int, user_data: Mapping[str, Any]) -> User:
        """Send ``user_data`` for ``user_id`` and refresh the current user."""

        response = await self._client.request_json("PUT", f"/users/{user_id}", json_body=dict(user_data))
        user = _unwrap_user(response)
        if user.token:
            await self._store.save(user)
        elif self._current_user and self._current_user.id == user.id:
            user = user.model_copy(update={"token": self._current_user.token})
        self._current_user = user
        return user

    async def update_profile(self, form: Mapping[str, Any]) -> User:
        """Validate profile form data and update the signed-in user."""

        user = self.require_user()
        payload = build_profile_update(form)
        return await self.update_user(user.id, payload)

    def is_authenticated(self) -> bool:
        return bool(self._current_user and self._current_user.token)

    def is_logged_in(self) -> bool:
        return self.is_authenticated()

    def get_token(self) -> str | None:
        return self._current_user.token if self._current_user else None

    def is_admin(self) -> bool:
        return bool(self._current_user and self._current_user.is_admin)

    def require_user(self) -> User:
        if not self.is_authenticated() or self._current_user is None:
            raise AuthenticationRequiredError()
        return self._current_user
