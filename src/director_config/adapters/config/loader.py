"""Settings of the director-config tool itself, read with lib_layered_config.

These settings say where the director document lives and how logging
behaves. The director document is read by :mod:`.director_file`.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from lib_layered_config import DEFAULT_MAX_PROFILE_LENGTH, Config, read_config, validate_profile_name

from director_config import __init__conf__

_DEFAULTS_FILE = Path(__file__).with_name("defaultconfig.toml")


def validate_profile(profile: str, max_length: int | None = None) -> None:
    """Refuse profile names that could leave the settings directories.

    Raises:
        ValueError: For empty, overlong, reserved or path-like names.

    Example:
        >>> validate_profile("staging")
        >>> validate_profile("../director")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: profile contains invalid characters: ../director
    """
    validate_profile_name(profile, max_length=DEFAULT_MAX_PROFILE_LENGTH if max_length is None else max_length)


def get_default_config_path() -> Path:
    """Location of the bundled ``defaultconfig.toml``.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return _DEFAULTS_FILE


@lru_cache(maxsize=4)
def _read_layers(profile: str | None, start_dir: str | None) -> Config:
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=_DEFAULTS_FILE,
        start_dir=start_dir,
    )


class _SettingsLoader:
    """Callable returning the merged settings; each profile is read once per process."""

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config:
        """Merge defaults, app, host, user, ``.env`` and environment layers.

        Args:
            profile: Reads ``profile/<name>/`` variants of every layer.
            start_dir: Where ``.env`` discovery starts.

        Raises:
            ValueError: When *profile* is not a safe name.
        """
        if profile is not None:
            validate_profile(profile)
        return _read_layers(profile, start_dir)

    def cache_clear(self) -> None:
        """Forget every cached read, e.g. after tests change the environment."""
        _read_layers.cache_clear()


get_config = _SettingsLoader()


__all__ = [
    "get_config",
    "get_default_config_path",
    "validate_profile",
]
