"""
Included/excluded region patterns.

Regions are configured as multi-line text, one regular expression per
line. Blank text means the dimension is unrestricted, which is returned
as None rather than as an empty tuple.
"""

import re

from tfs_common.exceptions import PatternCompileError
from tfs_common.service import PatternSet

_LINE_BREAKS = re.compile(r"[\r\n]+")


def normalize_patterns(raw: str | None) -> list[str] | None:
    """
    Split raw region text into pattern strings.

    Args:
        raw: Multi-line region text from the configuration

    Returns:
        Non-empty pattern strings, or None if the text is blank
    """
    if raw is None or not raw.strip():
        return None
    return [line for line in _LINE_BREAKS.split(raw) if line]


def compile_patterns(raw: str | None) -> PatternSet:
    """
    Compile raw region text into an immutable pattern set.

    Args:
        raw: Multi-line region text from the configuration

    Returns:
        Compiled patterns, or None if the text is blank (unrestricted)

    Raises:
        PatternCompileError: If any line is not a valid regular expression
    """
    normalized = normalize_patterns(raw)
    if normalized is None:
        return None

    compiled = []
    for pattern in normalized:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise PatternCompileError(
                f"Invalid region pattern {pattern!r}: {e}", pattern=pattern
            ) from e
    return tuple(compiled)

