import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from metrifi.services.identity import AuthenticationError, IdentityProvider, Principal

logger = logging.getLogger(__name__)

AUTH_REQUIRED = "Authentication required."
NOT_PERMITTED = "You do not have permission to create pages."


@dataclass(frozen=True)
class Authorized:
    principal: Principal


@dataclass(frozen=True)
class Denied:
    code: str
    status: int
    message: str


AuthResult = Union[Authorized, Denied]


def parse_basic_credentials(header: Optional[str]) -> Optional[Tuple[str, str]]:
    """
    Decode ``Basic <base64(username:password)>``.

    Returns None when the header cannot yield a username/password pair.
    """
    if not header:
        return None

    scheme, _, encoded = header.strip().partition(" ")
    if scheme.lower() != "basic" or not encoded.strip():
        return None

    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None

    if ":" not in decoded:
        return None

    username, password = decoded.split(":", 1)
    return username, password


def authorize(header: Optional[str], *, identity_provider: IdentityProvider) -> AuthResult:
    """
    Gate for page-writing endpoints.

    - no header                      -> Denied 401
    - header that does not decode    -> Denied 401
    - rejected by identity provider  -> Denied 403
    - principal without edit_pages   -> Denied 403
    """
    if not header:
        return Denied("UNAUTHENTICATED", 401, AUTH_REQUIRED)

    credentials = parse_basic_credentials(header)
    if credentials is None:
        logger.info("Rejected malformed Basic credential header")
        return Denied("UNAUTHENTICATED", 401, AUTH_REQUIRED)

    username, password = credentials
    try:
        principal = identity_provider.verify(username, password)
    except AuthenticationError as exc:
        logger.info("Credential check failed for %r: %s", username, exc)
        return Denied("FORBIDDEN", 403, NOT_PERMITTED)

    if not principal.can_edit_pages():
        logger.info("User %r lacks edit_pages", username)
        return Denied("FORBIDDEN", 403, NOT_PERMITTED)

    return Authorized(principal)
