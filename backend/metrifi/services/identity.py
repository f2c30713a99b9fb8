"""
Identity provider backed by users and their application passwords.
"""
from dataclasses import dataclass, field

from metrifi.models.user import User

EDIT_PAGES = "edit_pages"


class AuthenticationError(Exception):
    """The username/password pair does not identify an active user."""


@dataclass(frozen=True)
class Principal:
    user_id: str
    username: str
    role: str
    capabilities: frozenset = field(default_factory=frozenset)

    def can(self, capability: str) -> bool:
        return capability in self.capabilities

    def can_edit_pages(self) -> bool:
        return self.can(EDIT_PAGES)


class IdentityProvider:
    def verify(self, username: str, password: str) -> Principal:
        """
        Resolve a principal from a username (or email) and an application password.

        Raises:
            AuthenticationError: unknown or inactive user, or no matching password
        """
        if not username or not password:
            raise AuthenticationError("Username and password are required")

        user = User.query.filter(
            (User.username == username) | (User.email == username)
        ).first()

        if not user or not user.is_active:
            raise AuthenticationError("Unknown or inactive user")

        if not any(ap.check_password(password) for ap in user.application_passwords):
            raise AuthenticationError("Invalid application password")

        return Principal(
            user_id=user.id,
            username=user.username,
            role=user.role,
            capabilities=user.capabilities,
        )
