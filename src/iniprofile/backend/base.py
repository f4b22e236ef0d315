from typing import Protocol

import attrs

# Platform error codes shared by every backend.
ERROR_SUCCESS = 0
ERROR_INVALID_FUNCTION = 1
ERROR_FILE_NOT_FOUND = 2
ERROR_PATH_NOT_FOUND = 3
ERROR_ACCESS_DENIED = 5
ERROR_INVALID_PARAMETER = 87


@attrs.frozen
class ReadResult:
    """The outcome of a profile-string read.

    Attributes:
        buffer: The UTF-16-LE output buffer, two bytes per code unit.
        count: The number of code units copied, excluding the terminating NUL.
        error: The platform error code left by the call.
    """

    buffer: bytes
    count: int
    error: int = ERROR_SUCCESS


@attrs.frozen
class WriteResult:
    """The outcome of a profile-string write.

    Attributes:
        ok: Whether the call reported success.
        error: The platform error code left by the call.
    """

    ok: bool
    error: int = ERROR_SUCCESS


class ProfileBackend(Protocol):
    """The native routines that read and write INI files.

    Absent arguments are passed as None, which is not the same as an empty string.
    """

    def read(
        self,
        path: str,
        section: str | None,
        key: str | None,
        default: str | None,
        size: int,
    ) -> ReadResult:
        """Copy a value, or a list of section or key names, into a buffer.

        Args:
            path: The absolute path to the INI file.
            section: The section to read from. If None, section names are listed.
            key: The key to read. If None, the key names in the section are listed.
            default: Returned if the key does not exist.
            size: The size of the buffer in UTF-16 code units.

        Returns:
            The filled buffer.
        """
        ...

    def write(
        self, path: str, section: str, key: str | None, value: str | None
    ) -> WriteResult:
        """Set or delete a value.

        Args:
            path: The absolute path to the INI file.
            section: The section to write to.
            key: The key to set. If None, the whole section is deleted.
            value: The value to set. If None, the key is deleted.

        Returns:
            Whether the write succeeded.
        """
        ...

    def describe(self, code: int) -> str:
        """Return a human-readable description of a platform error code."""
        ...
