"""Bearer token helpers.

Tokens are opaque strings issued by the server. They are never stored on
disk; they live only in the session context of a single run.
"""

BEARER_PREFIX = "Bearer "


def auth_headers(token: str | None) -> dict[str, str]:
    """Build Authorization header dict.

    Args:
        token: Bearer token string

    Returns:
        Dict with Authorization header, or empty dict if no token
    """
    if token:
        return {"Authorization": f"{BEARER_PREFIX}{token}"}
    return {}


def extract_bearer_token(header_value: str | None) -> str | None:
    """Extract the token from an Authorization header value.

    Args:
        header_value: Raw header value, e.g. "Bearer eyJ..."

    Returns:
        The token, or None if the header is missing or carries no token
    """
    if not header_value:
        return None
    token = header_value.replace(BEARER_PREFIX, "", 1).strip()
    return token or None
