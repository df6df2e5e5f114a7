"""Format-specific content inspection: CSV shape, PDF and SVG active content."""

import re

CSV_SAMPLE_BYTES = 2048

_LINE_SPLIT = re.compile(r"\r?\n")

# Dictionary keys for embedded scripts and automatic actions. Word boundaries
# and \w are ASCII-only; bytes above 0x7F never count as word characters.
PDF_ACTIVE_CONTENT_PATTERNS = (
    re.compile(r"/JavaScript\b", re.ASCII),
    re.compile(r"/JS\b", re.ASCII),
    re.compile(r"/AA\b", re.ASCII),
)

SVG_ACTIVE_CONTENT_PATTERNS = (
    re.compile(r"<script\b", re.IGNORECASE | re.ASCII),
    re.compile(r"on\w+=\"[^\"]*\"", re.IGNORECASE | re.ASCII),
    re.compile(r"on\w+='[^']*'", re.IGNORECASE | re.ASCII),
    re.compile(r"javascript:", re.IGNORECASE | re.ASCII),
    re.compile(r"data:text/html", re.IGNORECASE | re.ASCII),
    re.compile(r"<[^>]+xlink:href=['\"]?javascript:", re.IGNORECASE | re.ASCII),
)


def looks_like_csv(buffer: bytes, sample_size: int = CSV_SAMPLE_BYTES) -> bool:
    """
    Cheap shape check for comma separated data.

    Only the first two non-empty lines of the sample are considered. Both must
    contain a comma and split into the same number of fields (more than one).
    This is a heuristic, not a parser.

    Args:
        buffer: Raw file content
        sample_size: Number of leading bytes to inspect

    Returns:
        bool: True if the sample looks like CSV
    """
    sample = buffer[:sample_size].decode("utf-8", errors="replace")
    lines = [line for line in _LINE_SPLIT.split(sample) if line]
    if len(lines) < 2:
        return False

    first_line, second_line = lines[0], lines[1]
    if "," not in first_line or "," not in second_line:
        return False

    columns = len(first_line.split(","))
    return columns > 1 and columns == len(second_line.split(","))


def has_malicious_pdf(buffer: bytes) -> bool:
    """True if the PDF references JavaScript or automatic actions."""
    text = buffer.decode("latin-1")
    return any(pattern.search(text) for pattern in PDF_ACTIVE_CONTENT_PATTERNS)


def has_malicious_svg(buffer: bytes) -> bool:
    """True if the SVG carries scripts, event handlers or script-bearing URIs."""
    text = buffer.decode("utf-8", errors="replace")
    return any(pattern.search(text) for pattern in SVG_ACTIVE_CONTENT_PATTERNS)
