"""Path helpers."""

import re
from typing import Optional

_EXTENSION_RE = re.compile(r'(?:\.([^./\\]+))?$')


def extract_file_extension(filename: str) -> Optional[str]:
    """Get the extension of the final path segment without the dot.

    Examples:
        >>> extract_file_extension("docs/intro.md")
        'md'
        >>> extract_file_extension("Makefile") is None
        True
    """
    match = _EXTENSION_RE.search(filename)
    return match.group(1) if match else None
