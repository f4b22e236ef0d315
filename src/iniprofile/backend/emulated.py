"""A pure-Python implementation of the profile-string routines.

This reproduces what GetPrivateProfileStringW and WritePrivateProfileStringW do,
including how they truncate their output buffer, so it can stand in for them
on platforms that don't have them.
"""

import errno
import logging
import pathlib

from .. import ini
from .base import (
    ERROR_ACCESS_DENIED,
    ERROR_FILE_NOT_FOUND,
    ERROR_INVALID_FUNCTION,
    ERROR_INVALID_PARAMETER,
    ERROR_PATH_NOT_FOUND,
    ERROR_SUCCESS,
    ReadResult,
    WriteResult,
)

_log = logging.getLogger(__name__)

MESSAGES = {
    ERROR_SUCCESS: "The operation completed successfully.",
    ERROR_INVALID_FUNCTION: "Incorrect function.",
    ERROR_FILE_NOT_FOUND: "The system cannot find the file specified.",
    ERROR_PATH_NOT_FOUND: "The system cannot find the path specified.",
    ERROR_ACCESS_DENIED: "Access is denied.",
    ERROR_INVALID_PARAMETER: "The parameter is incorrect.",
}


def error_code(e: OSError, writing: bool = False) -> int:
    """Map an OS error to a platform error code.

    Args:
        e: The error.
        writing: Whether the error occured while writing.
            A missing file can only mean a missing parent directory then.

    Returns:
        The error code.
    """

    match e.errno:
        case errno.ENOENT:
            return ERROR_PATH_NOT_FOUND if writing else ERROR_FILE_NOT_FOUND
        case errno.EACCES | errno.EPERM | errno.EISDIR:
            return ERROR_ACCESS_DENIED
        case _:
            return ERROR_INVALID_FUNCTION


def copy_string(text: str, size: int) -> tuple[bytes, int]:
    # Copy a single string into a buffer, truncating it to fit alongside its NUL.
    units = text.encode("utf-16-le")
    count = min(len(units) // 2, size - 1)

    buffer = bytearray(size * 2)
    buffer[: count * 2] = units[: count * 2]

    return bytes(buffer), count


def copy_multistring(names: list[str], size: int) -> tuple[bytes, int]:
    # Copy NUL-separated names into a buffer terminated by an extra NUL.
    units = "".join(name + "\0" for name in names).encode("utf-16-le")
    count = len(units) // 2

    if count + 1 > size:
        # Truncated, leaving room for two NULs.
        count = size - 2

    buffer = bytearray(size * 2)
    buffer[: count * 2] = units[: count * 2]

    return bytes(buffer), count


class EmulatedBackend:
    """Profile-string routines that edit INI files directly.

    Section and key names are matched case-insensitively.
    Files are written back in the encoding they were read in,
    and new files are created in the legacy encoding (see ini.LEGACY_ENCODING).
    """

    def _load(self, path: pathlib.Path) -> ini.Document:
        return ini.Document.from_bytes(path.read_bytes())

    def read(
        self,
        path: str,
        section: str | None,
        key: str | None,
        default: str | None,
        size: int,
    ) -> ReadResult:
        if size < 1:
            return ReadResult(b"", 0, ERROR_INVALID_PARAMETER)

        single = section is not None and key is not None
        error = ERROR_SUCCESS

        try:
            doc = self._load(pathlib.Path(path))
        except OSError as e:
            error = error_code(e)
            # The routines carry on as if the file was empty.
            doc = ini.Document()

        if section is None:
            names = doc.sections()

        elif key is None:
            names = doc.keys(section)
            if not doc.has_section(section) and not error:
                error = ERROR_FILE_NOT_FOUND

        else:
            value = doc.get(section, key)
            if value is None:
                value = (default or "").rstrip()
                if not error:
                    error = ERROR_FILE_NOT_FOUND

            buffer, count = copy_string(value, size)
            return ReadResult(buffer, count, error)

        if size < 2:
            return ReadResult(bytes(size * 2), 0, ERROR_INVALID_PARAMETER)

        buffer, count = copy_multistring(names, size)
        return ReadResult(buffer, count, error)

    def write(
        self, path: str, section: str, key: str | None, value: str | None
    ) -> WriteResult:
        file = pathlib.Path(path)

        try:
            doc = self._load(file)
        except FileNotFoundError:
            if key is None or value is None:
                # Nothing to delete from.
                return WriteResult(True)

            doc = ini.Document()
        except OSError as e:
            return WriteResult(False, error_code(e))

        if key is None:
            doc.remove_section(section)
        elif value is None:
            doc.remove(section, key)
        else:
            doc.set(section, key, value)

        try:
            file.write_bytes(doc.to_bytes())
        except OSError as e:
            return WriteResult(False, error_code(e, writing=True))

        _log.debug("wrote %d lines to %s", len(doc.lines), file)

        return WriteResult(True)

    def describe(self, code: int) -> str:
        return MESSAGES.get(code, f"Unknown error {code}.")
