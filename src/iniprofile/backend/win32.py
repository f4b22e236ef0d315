"""Bindings to the profile-string routines in kernel32 (Windows only)."""

import ctypes
from ctypes import wintypes

from .base import ReadResult, WriteResult

_kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)

_GetPrivateProfileStringW = _kernel32.GetPrivateProfileStringW
_GetPrivateProfileStringW.argtypes = [
    wintypes.LPCWSTR,  # lpAppName
    wintypes.LPCWSTR,  # lpKeyName
    wintypes.LPCWSTR,  # lpDefault
    wintypes.LPWSTR,  # lpReturnedString
    wintypes.DWORD,  # nSize
    wintypes.LPCWSTR,  # lpFileName
]
_GetPrivateProfileStringW.restype = wintypes.DWORD

_WritePrivateProfileStringW = _kernel32.WritePrivateProfileStringW
_WritePrivateProfileStringW.argtypes = [
    wintypes.LPCWSTR,  # lpAppName
    wintypes.LPCWSTR,  # lpKeyName
    wintypes.LPCWSTR,  # lpString
    wintypes.LPCWSTR,  # lpFileName
]
_WritePrivateProfileStringW.restype = wintypes.BOOL


class Win32Backend:
    """Profile-string routines provided by Windows.

    The last error is cleared before every call so a stale code from an earlier call isn't reported.
    """

    def read(
        self,
        path: str,
        section: str | None,
        key: str | None,
        default: str | None,
        size: int,
    ) -> ReadResult:
        buf = ctypes.create_unicode_buffer(size)

        ctypes.set_last_error(0)
        count = _GetPrivateProfileStringW(section, key, default, buf, size, path)
        error = ctypes.get_last_error()

        return ReadResult(
            ctypes.string_at(ctypes.addressof(buf), ctypes.sizeof(buf)), count, error
        )

    def write(
        self, path: str, section: str, key: str | None, value: str | None
    ) -> WriteResult:
        ctypes.set_last_error(0)
        ok = _WritePrivateProfileStringW(section, key, value, path)
        error = ctypes.get_last_error()

        return WriteResult(bool(ok), error)

    def describe(self, code: int) -> str:
        return ctypes.FormatError(code).strip()
