"""Backends implementing the native profile-string routines."""

import sys

from .base import (
    ERROR_ACCESS_DENIED,
    ERROR_FILE_NOT_FOUND,
    ERROR_INVALID_FUNCTION,
    ERROR_INVALID_PARAMETER,
    ERROR_PATH_NOT_FOUND,
    ERROR_SUCCESS,
    ProfileBackend,
    ReadResult,
    WriteResult,
)
from .emulated import EmulatedBackend

BACKENDS = ["auto", "win32", "emulated"]


def get_backend(name: str = "auto") -> ProfileBackend:
    """Create a backend by name.

    Args:
        name: One of BACKENDS. "auto" picks the Win32 routines on Windows
            and the emulated ones elsewhere.

    Returns:
        The backend.

    Raises:
        ValueError: The name is unknown, or the Win32 routines are unavailable.
    """

    if name == "auto":
        name = "win32" if sys.platform == "win32" else "emulated"

    match name:
        case "win32":
            # ctypes.WinDLL only exists on Windows.
            if sys.platform != "win32":
                raise ValueError("the win32 backend is only available on Windows")

            from .win32 import Win32Backend

            return Win32Backend()

        case "emulated":
            return EmulatedBackend()

        case _:
            raise ValueError(f"unknown backend: '{name}' (expected one of {BACKENDS})")
