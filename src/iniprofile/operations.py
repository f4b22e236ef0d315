"""High-level operations on INI files.

Each operation validates its arguments, then makes one call (or, for enumeration,
a series of calls) through an accessor. If no accessor is given, one is created
from the settings in the environment.
"""

import pathlib
from collections.abc import Callable, Iterator

import attrs

from .accessor import Accessor, resolve
from .config import Settings
from .errors import ValidationError

Path = str | pathlib.Path

# Asks the user whether or not to go ahead with a destructive operation.
Confirm = Callable[[str], bool]


@attrs.frozen
class Entry:
    """A key and its value in a section of an INI file."""

    section: str
    key: str
    value: str


def validate_section(section: str):
    """Raise ValidationError if a section name would break the INI syntax."""

    if "]" in section:
        raise ValidationError(f"section name cannot contain the ']' character: '{section}'")


def validate_key(key: str):
    """Raise ValidationError if a key name would break the INI syntax."""

    if "=" in key:
        raise ValidationError(f"key name cannot contain the '=' character: '{key}'")


def _accessor(accessor: Accessor | None) -> Accessor:
    if accessor is None:
        return Settings.from_env().accessor()

    return accessor


def get_value(
    path: Path,
    section: str,
    key: str,
    default: str | None = None,
    *,
    accessor: Accessor | None = None,
) -> str | None:
    """Read a key's value.

    Args:
        path: The path to the INI file.
        section: The section containing the key.
        key: The key.
        default: Returned if the key does not exist.

    Returns:
        The value, default, or None if there was nothing to return
        (the value is empty, or the key does not exist and there is no default).

    Raises:
        ValidationError: The section or key name is invalid.
        NotFoundError: The file does not exist.
        NativeError: The backend failed.
    """

    validate_section(section)
    validate_key(key)

    values = _accessor(accessor).query_profile_string(path, section, key, default)

    return values[0] if values else None


def list_sections(path: Path, *, accessor: Accessor | None = None) -> list[str]:
    """List the names of all sections in an INI file."""

    return _accessor(accessor).query_profile_string(path)


def list_keys(path: Path, section: str, *, accessor: Accessor | None = None) -> list[str]:
    """List the names of all keys in a section.

    Raises:
        ValidationError: The section name is invalid.
    """

    validate_section(section)

    return _accessor(accessor).query_profile_string(path, section)


def iter_entries(
    path: Path, section: str | None = None, *, accessor: Accessor | None = None
) -> Iterator[Entry]:
    """Enumerate every key and value in an INI file.

    Each value is read separately, so the file is read once per key.

    Args:
        path: The path to the INI file.
        section: If not None, only the keys in this section are enumerated.

    Yields:
        Entries in order of appearance. Keys with an empty value have an empty string as their value.

    Raises:
        ValidationError: The section name is invalid.
        NotFoundError: The file does not exist.
        NativeError: The backend failed.
    """

    accessor = _accessor(accessor)

    if section is None:
        sections = list_sections(path, accessor=accessor)
    else:
        validate_section(section)
        sections = [section]

    for name in sections:
        for key in list_keys(path, name, accessor=accessor):
            value = get_value(path, name, key, accessor=accessor)
            yield Entry(name, key, value or "")


def set_value(
    path: Path, section: str, key: str, value: str, *, accessor: Accessor | None = None
):
    """Set a key's value, creating the key, section and file as needed.

    Names are written as given (less surrounding whitespace), so a key that is empty
    or starts with ';', '#' or '[' is written but reads back as a comment, a section
    or nothing at all.

    Raises:
        ValidationError: The section or key name is invalid.
        NativeError: The backend failed.
    """

    validate_section(section)
    validate_key(key)

    _accessor(accessor).write_profile_string(path, section, key, value)


def remove_key(
    path: Path,
    section: str,
    key: str,
    confirm: Confirm | None = None,
    *,
    accessor: Accessor | None = None,
) -> bool:
    """Delete a key from a section.

    Args:
        path: The path to the INI file.
        section: The section containing the key.
        key: The key to delete.
        confirm: Called with a description of the deletion before it happens.
            If it returns False, nothing is deleted.
            If None, the key is deleted unconditionally.

    Returns:
        Whether or not the deletion went ahead.

    Raises:
        ValidationError: The section or key name is invalid.
        NotFoundError: The file does not exist.
        NativeError: The backend failed.
    """

    validate_section(section)
    validate_key(key)

    # Nothing to confirm if there is nothing to delete from.
    resolve(path)

    if confirm is not None and not confirm(f"Remove key '{key}' from [{section}] in {path}?"):
        return False

    _accessor(accessor).write_profile_string(path, section, key)
    return True


def remove_section(
    path: Path,
    section: str,
    confirm: Confirm | None = None,
    *,
    accessor: Accessor | None = None,
) -> bool:
    """Delete a section and all keys in it.

    See remove_key() for the meaning of confirm and the return value.

    Raises:
        ValidationError: The section name is invalid.
        NotFoundError: The file does not exist.
        NativeError: The backend failed.
    """

    validate_section(section)

    resolve(path)

    if confirm is not None and not confirm(f"Remove section [{section}] from {path}?"):
        return False

    _accessor(accessor).write_profile_string(path, section)
    return True
