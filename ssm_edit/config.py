"""
Configuration for ssm-edit.

Defaults can be kept in a small YAML file so a prefix, profile or region
does not have to be typed every time. Command-line flags always win.
"""

import dataclasses
import os
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
import ruamel.yaml
from ruamel.yaml.error import YAMLError

from .config_schema import validate_config
from .exceptions import ConfigError
from .retry import DEFAULT_ATTEMPTS, DEFAULT_DELAY

CONFIG_ENV_VAR = "SSM_EDIT_CONFIG"


def get_config_dir() -> Path:
    """Get config directory following the XDG base directory layout."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        base = Path(xdg_config)
    else:
        base = Path.home() / ".config"
    return base / "ssm-edit"


def find_config_file(explicit: Optional[str] = None) -> Optional[Path]:
    """
    Locate the configuration file to use.

    Args:
        explicit: Path given with --config; must exist if set

    Returns:
        Path to the file, or None when no file applies
    """
    if explicit:
        return Path(explicit).expanduser()

    env_file = os.environ.get(CONFIG_ENV_VAR)
    if env_file:
        return Path(env_file).expanduser()

    default_file = get_config_dir() / "config.yaml"
    if default_file.exists():
        return default_file
    return None


def load_config(path: Optional[Path]) -> Dict[str, Any]:
    """
    Load and validate a configuration file.

    Args:
        path: File to read; None means no file

    Returns:
        The parsed mapping (empty when there is no file)

    Raises:
        ConfigError: The file is unreadable, not YAML, or fails the schema
    """
    if path is None:
        return {}

    yaml = ruamel.yaml.YAML(typ='safe')
    try:
        with open(path, 'r') as f:
            config = yaml.load(f)
    except (OSError, YAMLError) as e:
        raise ConfigError(f"Error loading config file {path}: {e}") from e

    if config is None:
        return {}

    try:
        validate_config(config)
    except jsonschema.ValidationError as e:
        raise ConfigError(f"Invalid config file {path}: {e.message}") from e
    return config


@dataclasses.dataclass(frozen=True)
class Settings:
    """Effective settings for one session."""

    prefix: Optional[str] = None
    secure: bool = False
    quiet: bool = False
    debug: bool = False
    profile: Optional[str] = None
    region: Optional[str] = None
    attempts: int = DEFAULT_ATTEMPTS
    delay: float = DEFAULT_DELAY

    @classmethod
    def resolve(cls, args, config: Dict[str, Any]) -> "Settings":
        """
        Combine parsed arguments with file configuration.

        Args:
            args: argparse namespace; options left at None fall through
            config: Validated configuration mapping

        Returns:
            Settings with flags taking precedence over the file
        """
        retry = config.get('retry', {})

        def pick(arg_value, key, default):
            if arg_value is not None:
                return arg_value
            return config.get(key, default)

        return cls(
            prefix=pick(args.prefix, 'prefix', None),
            secure=pick(args.secure, 'secure', False),
            quiet=pick(args.quiet, 'quiet', False),
            debug=pick(args.debug, 'debug', False),
            profile=pick(args.profile, 'profile', None),
            region=pick(args.region, 'region', None),
            attempts=args.attempts if args.attempts is not None else retry.get('attempts', DEFAULT_ATTEMPTS),
            delay=args.delay if args.delay is not None else retry.get('delay', DEFAULT_DELAY),
        )
