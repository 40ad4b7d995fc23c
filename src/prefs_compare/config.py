"""prefs-compare configuration file management."""

import json
import os
from pathlib import Path

# Config directory in user's home, overridable for tests and CI
CONFIG_DIR_ENV = "PREFS_COMPARE_CONFIG_DIR"
DEFAULT_CONFIG_DIR = Path.home() / ".prefs-compare"
DEFAULT_OUTPUT_FILE = "prefs-compare-report.txt"


def get_config_dir() -> Path:
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_DIR


def get_config_file() -> Path:
    return get_config_dir() / "config.json"


def _default_config() -> dict:
    return {
        "output_file": None,
        "hide_mask": 0,
    }


def get_config() -> dict:
    """Load the configuration from disk.

    Returns:
        Configuration dict with keys:
        - output_file: Default report path or None
        - hide_mask: Default suppress mask for report sections
    """
    config_file = get_config_file()
    if not config_file.exists():
        return _default_config()

    try:
        loaded = json.loads(config_file.read_text())
    except (json.JSONDecodeError, OSError):
        return _default_config()

    if not isinstance(loaded, dict):
        return _default_config()

    config = _default_config()
    config.update(loaded)
    return config


def save_config(config: dict) -> None:
    """Save configuration to disk.

    Args:
        config: Configuration dict to save.
    """
    config_file = get_config_file()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(json.dumps(config, indent=2))


def get_output_file() -> Path:
    """Get the configured report path, falling back to the default name in the cwd."""
    output_file = get_config().get("output_file")
    if isinstance(output_file, str) and output_file:
        return Path(output_file)
    return Path.cwd() / DEFAULT_OUTPUT_FILE


def get_hide_mask() -> int:
    """Get the configured suppress mask.

    Returns:
        The mask, or 0 if the stored value is not an integer.
    """
    value = get_config().get("hide_mask", 0)
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value


def set_output_file(path: Path) -> None:
    config = get_config()
    config["output_file"] = str(path.expanduser().resolve())
    save_config(config)


def set_hide_mask(mask: int) -> None:
    config = get_config()
    config["hide_mask"] = mask
    save_config(config)


def clear_config() -> None:
    """Reset every setting to its default."""
    save_config(_default_config())
