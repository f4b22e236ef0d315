import functools
import logging
import pathlib

from . import buffer
from .backend import ERROR_FILE_NOT_FOUND, ERROR_SUCCESS, ProfileBackend, get_backend
from .errors import NativeError, NotFoundError

_log = logging.getLogger(__name__)


def resolve(path: str | pathlib.Path, must_exist: bool = True) -> pathlib.Path:
    """Resolve a path to an INI file to an absolute path.

    Args:
        path: The path.
        must_exist: Whether or not the file must exist.

    Returns:
        The absolute path.

    Raises:
        NotFoundError: must_exist is True and the file does not exist.
    """

    if isinstance(path, str):
        path = pathlib.Path(path)

    path = path.expanduser().resolve()

    if must_exist and not path.is_file():
        raise NotFoundError(path)

    return path


class Accessor:
    """Reads and writes INI files through a profile-string backend.

    Every operation is a complete round-trip to the file; nothing is cached.
    The existence of the file is checked up front where it matters,
    since the backend reports a missing file the same way as a missing key.

    Attributes:
        backend: The profile-string routines to call.
        increment: The initial size of the output buffer and how much it grows by,
            in UTF-16 code units.
    """

    backend: ProfileBackend
    increment: int

    def __init__(
        self,
        backend: ProfileBackend | None = None,
        increment: int = buffer.INCREMENT,
    ):
        if backend is None:
            backend = get_backend()

        self.backend = backend
        self.increment = increment

    def query_profile_string(
        self,
        path: str | pathlib.Path,
        section: str | None = None,
        key: str | None = None,
        default: str | None = None,
    ) -> list[str]:
        """Read a value, or list the sections or keys in an INI file.

        If section is None, the names of all sections are returned.
        If key is None, the names of all keys in the section are returned.
        Otherwise, the key's value (or default) is returned as the only item.

        Args:
            path: The path to the INI file.
            section: The section to read from.
            key: The key to read.
            default: Returned if the key does not exist.

        Returns:
            The strings read. Empty if there was nothing to return.

        Raises:
            NotFoundError: The file does not exist.
            NativeError: The backend failed.
        """

        path = resolve(path)

        single = section is not None and key is not None
        fill = functools.partial(self.backend.read, str(path), section, key, default)

        result = buffer.fill_growing(
            fill, buffer.reserved_units(single), increment=self.increment
        )

        # The file is known to exist, so 'not found' can only mean the section or key.
        if result.error not in (ERROR_SUCCESS, ERROR_FILE_NOT_FOUND):
            raise NativeError(result.error, self.backend.describe(result.error))

        return buffer.split_multistring(result.buffer, result.count, single)

    def write_profile_string(
        self,
        path: str | pathlib.Path,
        section: str,
        key: str | None = None,
        value: str | None = None,
    ):
        """Set a value, or delete a key or section in an INI file.

        If key is None, the whole section is deleted.
        If value is None, the key is deleted.
        Otherwise, the key is set to the value, creating the section (and file) as needed.

        Args:
            path: The path to the INI file.
            section: The section to write to.
            key: The key to write.
            value: The value to set.

        Raises:
            NotFoundError: The key or section is to be deleted but the file does not exist.
            NativeError: The backend failed.
        """

        deleting = key is None or value is None
        path = resolve(path, must_exist=deleting)

        result = self.backend.write(str(path), section, key, value)

        # A call can report success and still leave an error code behind, or vice versa.
        if not result.ok or result.error != ERROR_SUCCESS:
            raise NativeError(result.error, self.backend.describe(result.error))

        if key is None:
            _log.info("removed section [%s] from %s", section, path)
        elif value is None:
            _log.info("removed key '%s' from [%s] in %s", key, section, path)
        else:
            _log.info("set '%s' in [%s] in %s", key, section, path)
