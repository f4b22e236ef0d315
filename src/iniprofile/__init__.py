"""Read and write INI files through the profile-string routines."""

from .accessor import Accessor
from .backend import EmulatedBackend, ProfileBackend, get_backend
from .config import Settings
from .errors import IniProfileError, NativeError, NotFoundError, ValidationError
from .operations import (
    Entry,
    get_value,
    iter_entries,
    list_keys,
    list_sections,
    remove_key,
    remove_section,
    set_value,
)

__all__ = [
    "Accessor",
    "EmulatedBackend",
    "ProfileBackend",
    "get_backend",
    "Settings",
    "IniProfileError",
    "NativeError",
    "NotFoundError",
    "ValidationError",
    "Entry",
    "get_value",
    "iter_entries",
    "list_keys",
    "list_sections",
    "remove_key",
    "remove_section",
    "set_value",
]
