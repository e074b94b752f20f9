"""URL helpers: cache-key normalization and transport scheme rewriting."""

from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

from pyswapi._constants import KEY_SCHEME, SECURE_SCHEME


def _with_scheme(url: str, scheme: str) -> str:
    parts = urlsplit(url.strip())
    if not parts.netloc:
        # Relative or opaque input; nothing to rewrite.
        return url.strip()
    return urlunsplit(parts._replace(scheme=scheme))


def resource_key(url: str) -> str:
    """Return the cache key for *url*.

    Keys always use the ``http`` scheme so ``http://`` and ``https://``
    spellings of the same resource share a single cache entry.
    """
    return _with_scheme(url, KEY_SCHEME)


def secure_url(url: str) -> str:
    """Rewrite *url* to ``https`` for the actual network request."""
    return _with_scheme(url, SECURE_SCHEME)
