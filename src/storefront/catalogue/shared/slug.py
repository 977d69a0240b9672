"""URL-safe identifiers derived from display names."""

import re

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9-]")


def slugify(name: str) -> str:
    """Lowercase, turn whitespace runs into ``-`` and drop anything outside ``[a-z0-9-]``.

    >>> slugify("Acme Corp!")
    'acme-corp'
    """
    slug = _WHITESPACE.sub("-", name.lower())
    return _DISALLOWED.sub("", slug)
