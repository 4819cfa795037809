from __future__ import annotations

import hmac
from functools import wraps
from typing import Iterable, Optional

from flask import current_app, request

from ..core.enums import Capability
from ..core.exceptions import AuthenticationError, AuthorizationError


def _presented_key() -> Optional[str]:
    key = request.headers.get("X-API-Key")
    if key:
        return key.strip()
    auth = request.headers.get("Authorization", "")
    if auth.lower().startswith("bearer "):
        return auth[7:].strip() or None
    return None


def _matches(key: str, allowed: Iterable[str]) -> bool:
    found = False
    for candidate in allowed:
        # Compare against every configured key so timing does not reveal which matched.
        if candidate and hmac.compare_digest(key.encode("utf-8"), str(candidate).encode("utf-8")):
            found = True
    return found


def capabilities_for(key: str) -> set[Capability]:
    caps: set[Capability] = set()
    if _matches(key, current_app.config.get("ADMIN_API_KEYS", ())):
        caps.update({Capability.ADMIN, Capability.SCANNER})
    if _matches(key, current_app.config.get("SCANNER_API_KEYS", ())):
        caps.add(Capability.SCANNER)
    return caps


def require_capability(capability: Capability):
    """Gate a view behind an API key granting `capability`.

    Admin keys imply the scanner capability. With AUTH_ENABLED off every
    request passes.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not current_app.config.get("AUTH_ENABLED", True):
                return view(*args, **kwargs)

            key = _presented_key()
            if not key:
                raise AuthenticationError("API key required")

            caps = capabilities_for(key)
            if not caps:
                raise AuthenticationError("Invalid API key")
            if capability not in caps:
                raise AuthorizationError("API key lacks the %s capability" % capability.value)

            return view(*args, **kwargs)

        return wrapper

    return decorator
