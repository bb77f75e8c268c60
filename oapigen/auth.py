"""Bearer token authentication checked against the scopes an operation requires."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

PERMISSIONS_CLAIM = "perms"
SECURITY_SCHEME = "BearerAuth"
_BEARER_PREFIX = "Bearer "


class AuthError(Exception):
    """Raised when a request cannot be authenticated."""


class NoAuthHeaderError(AuthError):
    """The Authorization header is missing."""

    def __init__(self, message: str = "Authorization header is missing") -> None:
        super().__init__(message)


class InvalidAuthHeaderError(AuthError):
    """The Authorization header is not a bearer token."""

    def __init__(self, message: str = "Authorization header is malformed") -> None:
        super().__init__(message)


class ClaimsInvalidError(AuthError):
    """The token's claims do not cover the required scopes."""

    def __init__(self, message: str = "Provided claims do not match expected scopes") -> None:
        super().__init__(message)


def _wrap(exc: AuthError, prefix: str) -> AuthError:
    return type(exc)(f"{prefix}: {exc}")


def get_jws_from_header(header: str | None) -> str:
    """Extract the token from an "Authorization: Bearer <jws>" header value."""
    if not header:
        raise NoAuthHeaderError()
    if not header.startswith(_BEARER_PREFIX):
        raise InvalidAuthHeaderError()
    return header[len(_BEARER_PREFIX):]


def get_claims_from_token(claims: Mapping[str, Any]) -> list[str]:
    """Return the permission list held in a token's claims; none means empty."""
    if PERMISSIONS_CLAIM not in claims:
        return []
    raw = claims[PERMISSIONS_CLAIM]
    if not isinstance(raw, (list, tuple)):
        raise AuthError(f"'{PERMISSIONS_CLAIM}' claim is unexpected type'")
    result = []
    for index, item in enumerate(raw):
        if not isinstance(item, str):
            raise AuthError(f"{PERMISSIONS_CLAIM}[{index}] is not a string")
        result.append(item)
    return result


def check_token_claims(expected_claims: Iterable[str], claims: Mapping[str, Any]) -> list[str]:
    """Ensure every expected claim is present in the token; return the token's claims."""
    try:
        granted = get_claims_from_token(claims)
    except AuthError as exc:
        raise _wrap(exc, "getting claims from token") from exc
    present = set(granted)
    if any(expected not in present for expected in expected_claims):
        raise ClaimsInvalidError()
    return granted


def authenticate(
    validator: Callable[[str], Mapping[str, Any]],
    scheme_name: str,
    authorization: str | None,
    scopes: Iterable[str],
) -> list[str]:
    """Check a bearer token against the required scopes; return the claims it grants.

    validator turns a token into its claims and raises on an invalid token.
    """
    if scheme_name != SECURITY_SCHEME:
        raise AuthError(f"security scheme {scheme_name} != '{SECURITY_SCHEME}'")
    try:
        jws = get_jws_from_header(authorization)
    except AuthError as exc:
        raise _wrap(exc, "getting jws") from exc
    try:
        claims = validator(jws)
    except Exception as exc:
        raise AuthError(f"validating JWS: {exc}") from exc
    try:
        return check_token_claims(scopes, claims)
    except AuthError as exc:
        raise _wrap(exc, "token claims don't match") from exc