import attrs
import pytest

from iniprofile import buffer


@attrs.define
class Filled:
    buffer: bytes
    count: int


def utf16(text: str) -> bytes:
    return text.encode("utf-16-le")


def test_split_single():
    assert buffer.split_multistring(utf16("value\0\0\0"), 5, single=True) == ["value"]


def test_split_multi():
    data = utf16("Net\0Paths\0\0\0\0")
    assert buffer.split_multistring(data, 10, single=False) == ["Net", "Paths"]


def test_split_multi_keeps_empty_names():
    data = utf16("a\0\0b\0\0")
    assert buffer.split_multistring(data, 5, single=False) == ["a", "", "b"]


def test_split_empty():
    assert buffer.split_multistring(bytes(16), 0, single=True) == []
    assert buffer.split_multistring(bytes(16), 0, single=False) == []


def test_split_surrogate_pairs():
    # An astral character is two code units.
    data = utf16("🎵\0")
    assert buffer.split_multistring(data, 2, single=True) == ["🎵"]


@pytest.mark.parametrize("single, reserved", [(True, 1), (False, 2)])
def test_reserved_units(single: bool, reserved: int):
    assert buffer.reserved_units(single) == reserved


def test_fill_growing_first_try():
    sizes = []

    def fill(size: int) -> Filled:
        sizes.append(size)
        return Filled(b"", 10)

    assert buffer.fill_growing(fill, 1, increment=16).count == 10
    assert sizes == [16]


@pytest.mark.parametrize("reserved", [1, 2])
def test_fill_growing_retries_until_not_truncated(reserved: int):
    needed = 40
    sizes = []

    def fill(size: int) -> Filled:
        sizes.append(size)
        # Report truncation the way the routines do.
        return Filled(b"", needed if size - reserved > needed else size - reserved)

    result = buffer.fill_growing(fill, reserved, increment=16)

    assert result.count == needed
    assert sizes == [16, 32, 48]


def test_fill_growing_zero_is_terminal():
    sizes = []

    def fill(size: int) -> Filled:
        sizes.append(size)
        return Filled(b"", 0)

    assert buffer.fill_growing(fill, 2, increment=3).count == 0
    assert sizes == [3]


def test_fill_growing_increment_too_small():
    with pytest.raises(ValueError):
        buffer.fill_growing(lambda size: Filled(b"", 0), 2, increment=2)
