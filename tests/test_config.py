import pytest

from iniprofile import EmulatedBackend, Settings


def test_defaults():
    settings = Settings.from_env({})

    assert settings.backend == "auto"
    assert settings.increment == 2048
    assert not settings.assume_yes


def test_from_env():
    settings = Settings.from_env(
        {
            "INIPROFILE_BACKEND": "emulated",
            "INIPROFILE_BUFFER_INCREMENT": "64",
            "INIPROFILE_ASSUME_YES": "Yes",
            "UNRELATED": "x",
        }
    )

    assert settings == Settings(backend="emulated", increment=64, assume_yes=True)


@pytest.mark.parametrize(
    "environ",
    [
        {"INIPROFILE_BACKEND": "registry"},
        {"INIPROFILE_BUFFER_INCREMENT": "lots"},
        {"INIPROFILE_BUFFER_INCREMENT": "2"},
        {"INIPROFILE_ASSUME_YES": "maybe"},
    ],
)
def test_invalid(environ: dict[str, str]):
    with pytest.raises(ValueError):
        Settings.from_env(environ)


def test_accessor():
    accessor = Settings(backend="emulated", increment=100).accessor()

    assert isinstance(accessor.backend, EmulatedBackend)
    assert accessor.increment == 100
