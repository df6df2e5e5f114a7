"""Accept-list parsing and wildcard MIME matching."""

from dataclasses import dataclass
from typing import Iterable, List, Optional

WILDCARD = "*"

# Generic content sniffers report most structured text formats as text/plain.
TEXT_LIKE_MIME_TYPES = frozenset(
    {
        "text/plain",
        "text/csv",
        "text/tab-separated-values",
        "application/json",
        "application/xml",
        "text/html",
        "text/markdown",
        "text/yaml",
        "application/javascript",
        "application/typescript",
        "text/css",
        "text/x-python",
        "text/x-java-source",
        "text/x-csrc",
        "text/x-c++src",
        "text/x-ruby",
        "application/sql",
    }
)


@dataclass(frozen=True)
class MimeType:
    """A ``type/subtype`` pair; either side may be ``*`` in an accept pattern."""

    type: str
    subtype: str

    @classmethod
    def parse(cls, value: str) -> Optional["MimeType"]:
        """Parse ``type/subtype``; returns None when there is no ``/``."""
        if "/" not in value:
            return None
        main, _, sub = value.partition("/")
        return cls(main.strip(), sub.strip())

    def accepts(self, candidate: "MimeType") -> bool:
        """True if this pattern covers ``candidate``."""
        if self.type != WILDCARD and self.type != candidate.type:
            return False
        return self.subtype == WILDCARD or self.subtype == candidate.subtype

    def __str__(self) -> str:
        return f"{self.type}/{self.subtype}"


ANY_MIME_TYPE = MimeType(WILDCARD, WILDCARD)
PLAIN_TEXT = MimeType("text", "plain")


def base_mime(raw: str) -> str:
    """Drop ``;parameter=value`` suffixes and surrounding whitespace."""
    return raw.split(";", 1)[0].strip()


def parse_accept_list(accepts: str) -> List[MimeType]:
    """
    Parse a comma separated accept string once per validation.

    Items are trimmed and empty items dropped. Items without a ``/`` can never
    match a detected type, so they are dropped as well. Duplicates are kept.
    """
    patterns = []
    for item in accepts.split(","):
        pattern = MimeType.parse(item.strip())
        if pattern is not None:
            patterns.append(pattern)
    return patterns


def matches(candidate: str, accept_list: Iterable[MimeType]) -> bool:
    """
    Check whether a concrete MIME type satisfies any pattern of an accept list.

    Args:
        candidate: Base MIME type, already stripped of parameters
        accept_list: Parsed patterns of the form ``*/*``, ``type/*``, ``*/subtype`` or ``type/subtype``

    Returns:
        bool: True on the first matching pattern
    """
    parsed_candidate = MimeType.parse(candidate)
    for pattern in accept_list:
        if pattern == ANY_MIME_TYPE:
            return True
        if parsed_candidate is not None and pattern.accepts(parsed_candidate):
            return True
    return False


def is_text_like(mime: str) -> bool:
    return mime in TEXT_LIKE_MIME_TYPES
