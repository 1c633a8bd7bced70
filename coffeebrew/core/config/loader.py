"""
Configuration loader — layered ``brew.env`` files and core settings.

Three layers are read in precedence order, each overriding the one before:

    system  (/etc/homebrew/brew.env)
    prefix  (<prefix>/etc/homebrew/brew.env)
    user    ($XDG_CONFIG_HOME/homebrew/brew.env or ~/.homebrew/brew.env)

With HOMEBREW_SYSTEM_ENV_TAKES_PRIORITY set in the inherited environment
the system layer is read last instead, so it wins over the user layer.

Only ``HOMEBREW_*`` lines are imported. A missing or unreadable file is
not an error; a malformed line is reported and skipped.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from pathlib import Path

from coffeebrew.core.models.environment import ENV_PREFIX, ConfigLayer, ConfigLineError
from coffeebrew.core.models.settings import CoreSettings

logger = logging.getLogger(__name__)

ENV_FILE_NAME = "brew.env"
SYSTEM_CONFIG_DIR = Path("/etc/homebrew")
PRIORITY_TOGGLE = "HOMEBREW_SYSTEM_ENV_TAKES_PRIORITY"

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class ConfigError(Exception):
    """Raised when the core's configuration is missing or invalid."""


def user_config_dir(env: Mapping[str, str]) -> Path:
    """Per-user configuration directory (XDG-style override honored)."""
    xdg = env.get("XDG_CONFIG_HOME", "")
    if xdg:
        return Path(xdg) / "homebrew"
    return Path(env.get("HOME", "")) / ".homebrew"


def config_layers(
    prefix: Path,
    env: Mapping[str, str],
    system_dir: Path = SYSTEM_CONFIG_DIR,
) -> list[ConfigLayer]:
    """Return the env-file layers in the order they must be applied.

    Args:
        prefix: Installation prefix (for the prefix-local layer).
        env: Inherited environment snapshot.
        system_dir: System configuration directory (overridable for tests).
    """
    system = ConfigLayer(name="system", path=system_dir / ENV_FILE_NAME)
    prefix_layer = ConfigLayer(name="prefix", path=prefix / "etc" / "homebrew" / ENV_FILE_NAME)
    user = ConfigLayer(name="user", path=user_config_dir(env) / ENV_FILE_NAME)

    if env.get(PRIORITY_TOGGLE):
        return [prefix_layer, user, system]
    return [system, prefix_layer, user]


def parse_env_file(path: Path) -> tuple[dict[str, str], list[ConfigLineError]]:
    """Parse the namespaced assignments of one env file.

    Lines not starting with the namespace prefix are ignored. Values are
    taken literally (no quote stripping); surrounding whitespace on the
    line is dropped.

    Returns:
        (assignments, errors). Both empty if the file is absent or unreadable.
    """
    values: dict[str, str] = {}
    errors: list[ConfigLineError] = []

    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return values, errors
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping unreadable config %s: %s", path, e)
        return values, errors

    for number, raw in enumerate(content.splitlines(), start=1):
        line = raw.strip()
        if not line.startswith(ENV_PREFIX):
            continue

        key, sep, value = line.partition("=")
        if not sep:
            errors.append(ConfigLineError(
                path=path, line_number=number, line=line, reason="missing '='",
            ))
            continue
        if not _IDENTIFIER.match(key):
            errors.append(ConfigLineError(
                path=path, line_number=number, line=line, reason="not a valid identifier",
            ))
            continue

        values[key] = value

    return values, errors


def load_layered_config(
    layers: list[ConfigLayer],
    env: Mapping[str, str],
) -> tuple[dict[str, str], list[ConfigLineError]]:
    """Apply each layer on top of ``env`` and return the merged snapshot.

    The input mapping is not modified.
    """
    merged = dict(env)
    errors: list[ConfigLineError] = []

    for layer in layers:
        values, layer_errors = parse_env_file(layer.path)
        if values:
            logger.debug("Loaded %d value(s) from %s config %s", len(values), layer.name, layer.path)
        for err in layer_errors:
            logger.warning("Cannot export %s", err)
        merged.update(values)
        errors.extend(layer_errors)

    return merged, errors


def load_settings(env: Mapping[str, str]) -> CoreSettings:
    """Build the core's settings from its environment.

    Raises:
        ConfigError: If HOMEBREW_LIBRARY is missing (the core was not
            started through the bootstrap).
    """
    try:
        settings = CoreSettings.from_env(env)
    except ValueError as e:
        raise ConfigError(f"{e}. Run the core through the 'brew' entrypoint.") from e

    logger.debug(
        "Core settings: library=%s cache=%s no_api=%s",
        settings.library, settings.cache, settings.no_install_from_api,
    )
    return settings
