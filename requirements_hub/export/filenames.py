"""Portable filenames for exported requirements."""

RESERVED_CHARACTERS = frozenset('<>:"/\\|?*')


def sanitize_filename(filename: str | None) -> str:
    """Strip characters that are not allowed in filenames on common filesystems.

    Removes ASCII control characters (code points 0-31) and ``< > : " / \\ | ? *``,
    then trims surrounding whitespace. Applying it twice gives the same result
    as applying it once.
    """
    if not filename:
        return ""
    return "".join(
        char
        for char in filename
        if ord(char) > 31 and char not in RESERVED_CHARACTERS
    ).strip()


def requirement_filename(issue_number: int, title: str) -> str:
    """Build the sanitized ``"<number> <title>.md"`` filename for an issue."""
    return sanitize_filename(f"{issue_number} {title}.md")
