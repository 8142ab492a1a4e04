"""Local profile switching.

Profiles are picked by a username/email pair. There are no passwords or
tokens: this only decides whose entries the app is showing.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace

from .models import Role, User
from .state import AppState

logger = logging.getLogger(__name__)

ADMIN_USERNAME = "admin"


def _norm(value: str) -> str:
    return value.strip().lower()


def find_by_email(users: list[User], email: str) -> User | None:
    wanted = _norm(email)
    return next((u for u in users if u.email.lower() == wanted), None)


def find_by_username(users: list[User], username: str) -> User | None:
    wanted = _norm(username)
    return next((u for u in users if u.username.lower() == wanted), None)


def register_profile(state: AppState, username: str, email: str) -> AppState:
    """Create a profile and make it current."""
    username, email = username.strip(), email.strip()
    if not username or not email:
        raise ValueError("Username and email are required.")
    if find_by_email(state.users, email):
        raise ValueError("This email address is already registered.")
    if find_by_username(state.users, username):
        raise ValueError("This username is already taken.")

    role = Role.ADMIN if username.lower() == ADMIN_USERNAME else Role.USER
    user = User(id=str(uuid.uuid4()), username=username, email=email, role=role)
    logger.info("Registered profile %s (%s)", user.id, role.value)
    return replace(state, users=[*state.users, user], user=user)


def switch_profile(state: AppState, username: str, email: str) -> AppState:
    """Make an existing profile current."""
    if not username.strip() or not email.strip():
        raise ValueError("Username and email are required.")
    user = find_by_email(state.users, email)
    if user is None:
        raise LookupError("No account found with this email.")
    if user.username.lower() != _norm(username):
        raise ValueError("Username and Email do not match.")
    return replace(state, user=user)


def sign_out(state: AppState) -> AppState:
    return replace(state, user=None)


def update_profile(state: AppState, username: str | None = None, email: str | None = None) -> AppState:
    """Change the current profile's username and/or email."""
    if state.user is None:
        raise PermissionError("No profile selected.")

    others = [u for u in state.users if u.id != state.user.id]
    changes: dict[str, str] = {}
    if email is not None:
        email = email.strip()
        if not email:
            raise ValueError("Email cannot be empty.")
        if find_by_email(others, email):
            raise ValueError("Email already in use.")
        changes["email"] = email
    if username is not None:
        username = username.strip()
        if not username:
            raise ValueError("Username cannot be empty.")
        if find_by_username(others, username):
            raise ValueError("Username already in use.")
        changes["username"] = username

    updated = replace(state.user, **changes)
    users = [updated if u.id == updated.id else u for u in state.users]
    return replace(state, user=updated, users=users)
