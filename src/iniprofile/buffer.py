"""Helpers for calling into fixed-size output buffers.

Profile-string routines copy their result into a caller-supplied UTF-16 buffer
and return how many code units were copied, silently truncating the result if
the buffer is too small. These helpers retry such a call with a growing buffer
and decode what comes back.
"""

import logging
from collections.abc import Callable
from typing import Protocol, TypeVar

_log = logging.getLogger(__name__)

NUL = "\0"

# Size of the first buffer and of each growth step, in UTF-16 code units.
INCREMENT = 2048

T = TypeVar("T", bound="Filled")


class Filled(Protocol):
    """The outcome of filling a buffer."""

    buffer: bytes
    count: int


def reserved_units(single: bool) -> int:
    """Return how many code units a truncated result leaves unused.

    A single string is terminated by one NUL and a multi-string by two,
    so a truncated call reports a count that much smaller than the buffer.

    Args:
        single: Whether the result is a single string (as opposed to a multi-string).

    Returns:
        The number of reserved code units.
    """

    return 1 if single else 2


def fill_growing(
    fill: Callable[[int], T], reserved: int, increment: int = INCREMENT
) -> T:
    """Call fill with a growing buffer size until the result is not truncated.

    Args:
        fill: Fills a buffer of the given size (in code units).
        reserved: How many code units short of the size a truncated count is.
            See reserved_units().
        increment: How many code units to grow the buffer by on every attempt.

    Returns:
        The first result that was not truncated.

    Raises:
        ValueError: The increment is too small to hold any result.
    """

    if increment <= reserved:
        raise ValueError(f"buffer increment must be greater than {reserved}")

    size = increment

    while True:
        result = fill(size)

        # Nothing copied means nothing to return, not a truncation.
        if result.count == 0 or result.count != size - reserved:
            return result

        size += increment
        _log.debug("result truncated at %d code units, growing to %d", result.count, size)


def split_multistring(data: bytes, count: int, single: bool) -> list[str]:
    """Decode the filled portion of a UTF-16 buffer into strings.

    Args:
        data: The raw UTF-16-LE buffer.
        count: The number of code units the call reported as copied.
        single: Whether the buffer holds a single string.
            Otherwise it holds NUL-separated strings and the final empty segment is dropped.

    Returns:
        The strings, or an empty list if count is zero.
    """

    if count == 0:
        return []

    text = data[: count * 2].decode("utf-16-le")
    segments = text.split(NUL)

    if single:
        return segments[:1]

    return segments[:-1]
