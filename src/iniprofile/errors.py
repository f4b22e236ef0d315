import pathlib


class IniProfileError(Exception):
    pass


class ValidationError(IniProfileError, ValueError):
    """A section or key contains a character that would corrupt the INI syntax."""

    pass


class NotFoundError(IniProfileError, FileNotFoundError):
    """The INI file does not exist, but the operation requires it to.

    Attributes:
        path: The resolved path to the file.
    """

    path: pathlib.Path

    def __init__(self, path: pathlib.Path):
        self.path = path

        super().__init__(f"INI file not found: '{path}'")


class NativeError(IniProfileError, OSError):
    """The profile-string backend failed with a platform error code.

    Attributes:
        code: The platform error code.
        description: The platform's description of the code.
    """

    code: int
    description: str

    def __init__(self, code: int, description: str):
        self.code = code
        self.description = description

        super().__init__(f"error {code}: {description}")
