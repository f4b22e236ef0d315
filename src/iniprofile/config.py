import os
from collections.abc import Mapping
from typing import Literal, Self

import attrs
import cattrs

from . import buffer
from .accessor import Accessor
from .backend import get_backend

ENV_PREFIX = "INIPROFILE_"

TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off", ""}

# Variables not named after their attribute.
ENV_NAMES = {"increment": "BUFFER_INCREMENT"}


def _to_bool(value: str | bool, _) -> bool:
    if isinstance(value, bool):
        return value

    v = value.strip().lower()
    if v in TRUTHY:
        return True
    if v in FALSY:
        return False

    raise ValueError(f"not a boolean: '{value}'")


converter = cattrs.Converter()
converter.register_structure_hook(bool, _to_bool)


@attrs.define
class Settings:
    """Configuration for accessing INI files.

    Attributes:
        backend: Which profile-string routines to use (see backend.BACKENDS).
        increment: The size of the output buffer and how much it grows by, in UTF-16 code units.
        assume_yes: Whether or not to skip confirmation before deleting keys and sections.
    """

    backend: Literal["auto", "win32", "emulated"] = "auto"
    increment: int = attrs.field(
        default=buffer.INCREMENT, validator=attrs.validators.ge(3)
    )
    assume_yes: bool = False

    def accessor(self) -> Accessor:
        """Create an accessor with these settings.

        Returns:
            The accessor.
        """

        return Accessor(get_backend(self.backend), increment=self.increment)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        """Parse settings from environment variables.

        Variables are named after the attributes in uppercase with the INIPROFILE_ prefix,
        i.e. INIPROFILE_BACKEND. The increment is read from INIPROFILE_BUFFER_INCREMENT.

        Args:
            environ: The variables to parse. Defaults to os.environ.

        Returns:
            The settings.

        Raises:
            ValueError: A variable has an invalid value.
        """

        if environ is None:
            environ = os.environ

        config = {}
        for field in attrs.fields(cls):
            name = ENV_PREFIX + ENV_NAMES.get(field.name, field.name.upper())
            if name in environ:
                config[field.name] = environ[name]

        try:
            return converter.structure(config, cls)
        except cattrs.BaseValidationError as e:
            errors = "; ".join(str(exc) for exc in e.exceptions)
            raise ValueError(f"invalid settings: {errors}") from e
