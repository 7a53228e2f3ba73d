"""Grouping-path parsing.

A grouping path places an item inside nested tab groups. Authors write it as a
slash-delimited string (``"demographics/details"``), as an explicit sequence of
segments, or as a mapping of numeric level keys to segment names
(``{"1": "demographics", "2": "details"}``). All forms normalize to a tuple of
non-empty, trimmed segment names; the empty tuple means "attach at root".
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Final

from .errors import InvalidPathError

SEPARATOR: Final[str] = "/"

PathInput = str | Sequence[str] | Mapping[int | str, str] | None


def parse_path(raw: PathInput, *, strict: bool = False) -> tuple[str, ...]:
    """Parse a grouping path into ordered segment names.

    Args:
        raw: Path string, explicit segment sequence, numeric-keyed mapping, or None.
        strict: When True, a non-empty string that reduces to zero segments (for
            example ``" / "``) raises instead of resolving to root.

    Returns:
        Tuple of segment names; empty for root.

    Raises:
        InvalidPathError: When the input type is unsupported, an explicit
            segment is blank or contains the separator, or (strict mode) a
            string holds only separators/whitespace.
    """

    if raw is None:
        return ()

    if isinstance(raw, str):
        segments = tuple(part.strip() for part in raw.split(SEPARATOR) if part.strip())
        if not segments and raw and strict:
            raise InvalidPathError(
                f"Grouping path {raw!r} contains no segments after trimming.",
                path=raw,
            )
        return segments

    if isinstance(raw, Mapping):
        ordered: list[tuple[int, object]] = []
        for key, value in raw.items():
            level = _parse_level(key, raw)
            ordered.append((level, value))
        ordered.sort(key=lambda pair: pair[0])
        return tuple(_explicit_segment(value, raw) for _, value in ordered)

    if isinstance(raw, Sequence):
        return tuple(_explicit_segment(value, raw) for value in raw)

    raise InvalidPathError(
        f"Grouping path must be a string, a sequence of strings, or a level mapping; got {type(raw).__name__}.",
        path=raw,
    )


def format_path(segments: Sequence[str]) -> str:
    """Join segments back into slash notation."""

    return SEPARATOR.join(segments)


def _parse_level(key: object, raw: object) -> int:
    """Return the numeric level for a mapping key."""

    if isinstance(key, bool):
        raise InvalidPathError(f"Grouping path level keys must be numeric; got {key!r}.", path=raw)
    if isinstance(key, int):
        return key
    if isinstance(key, str) and key.strip().isdigit():
        return int(key.strip())
    raise InvalidPathError(f"Grouping path level keys must be numeric; got {key!r}.", path=raw)


def _explicit_segment(value: object, raw: object) -> str:
    """Validate one segment of an explicit sequence/mapping path."""

    if not isinstance(value, str):
        raise InvalidPathError(f"Grouping path segments must be strings; got {value!r}.", path=raw)
    segment = value.strip()
    if not segment:
        raise InvalidPathError("Grouping path segments must be non-empty.", path=raw)
    if SEPARATOR in segment:
        raise InvalidPathError(
            f"Grouping path segment {segment!r} must not contain {SEPARATOR!r} in explicit form.",
            path=raw,
        )
    return segment
