"""Resolve the raw client address for a request.

The result is only ever fed to the IP anonymizer; it must not be stored or
logged as-is.
"""

from __future__ import annotations

from fastapi import Request

from app.core.config import settings


def resolve_client_address(request: Request) -> str:
    """Return the caller's address, or an empty string when unknown.

    With ``APP_TRUST_FORWARDED_FOR`` enabled the left-most
    ``X-Forwarded-For`` entry is used (the original client as seen by the
    first proxy). Otherwise the socket peer address is used.
    """

    if settings.app.trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for", "")
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    return request.client.host if request.client else ""
