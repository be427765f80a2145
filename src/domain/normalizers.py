"""Boundary normalization for profile scalar fields.

Everything here is pure: no I/O, no logging. Malformed input is reported as a
``ValidationFailure`` naming the offending field.
"""

import re
from collections.abc import Mapping, Sequence
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from core.exceptions import ValidationFailure
from domain.entities.profile import SOCIAL_NETWORKS

_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*)://")
_HOST_RE = re.compile(r"^[\w.\-]+$", re.UNICODE)
# Matches the width of the stored website and social link columns.
MAX_URL_LENGTH = 2048


def _invalid(field: str) -> ValidationFailure:
    return ValidationFailure.for_field(field, "Please include a valid URL")


def normalize_url(value: str | None, field: str = "website") -> str:
    """Canonicalize a user-supplied link into an absolute https URL.

    Empty input stays empty. ``normalize_url(normalize_url(u)) == normalize_url(u)``.
    """
    if value is None:
        return ""
    raw = value.strip()
    if not raw:
        return ""

    if raw.startswith("//"):
        raw = "https:" + raw
    match = _SCHEME_RE.match(raw)
    if match is None:
        scheme = "https"
        raw = "https://" + raw
    else:
        scheme = match.group(1).lower()
        if scheme not in ("http", "https"):
            raise ValidationFailure.for_field(field, "URL must use http or https")

    try:
        parts = urlsplit(raw)
        port = parts.port
    except ValueError as e:
        raise _invalid(field) from e

    host = (parts.hostname or "").rstrip(".")
    bare = host[4:]
    if host.startswith("www.") and "." in bare and not bare.startswith("www."):
        host = bare
    if (
        not host
        or not _HOST_RE.match(host)
        or host.startswith(("-", "."))
        or "" in host.split(".")
    ):
        raise _invalid(field)

    # The connection moves to https, so only that scheme's default port goes away.
    default_port = port == 443 or (port == 80 and scheme == "http")
    netloc = host if port is None or default_port else f"{host}:{port}"

    path = re.sub(r"/{2,}", "/", parts.path).rstrip("/")
    query = urlencode(sorted(parse_qsl(parts.query, keep_blank_values=True)))

    normalized = urlunsplit(("https", netloc, path, query, parts.fragment))
    if len(normalized) > MAX_URL_LENGTH:
        raise ValidationFailure.for_field(
            field, f"URL must be at most {MAX_URL_LENGTH} characters"
        )
    return normalized


def normalize_skills(value: str | Sequence[str] | None) -> list[str]:
    """Turn ``"a, b ,c"`` or ``[" a", "b "]`` into ``["a", "b", "c"]``."""
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else list(value)
    return [item.strip() for item in items if isinstance(item, str) and item.strip()]


def normalize_social(links: Mapping[str, str | None] | None) -> dict[str, str]:
    """Normalize every supported network link; unknown keys are dropped."""
    links = links or {}
    return {
        network: normalize_url(links.get(network), field=network)
        for network in SOCIAL_NETWORKS
    }
