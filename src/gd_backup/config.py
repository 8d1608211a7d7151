"""Settings file loading and first-run bootstrap."""

import json
import logging
import os
import platform
import sys
from dataclasses import dataclass
from pathlib import Path

from .constants import CONFIG_FILE

log = logging.getLogger("gd_backup")

# On-disk key for each Config field
_FIELDS = {
    "save_dir": "SaveDir",
    "assets_dir": "AssetsDir",
    "backup_root": "BackupRoot",
}


@dataclass(frozen=True)
class Config:
    save_dir: Path
    assets_dir: Path
    backup_root: Path

    def to_json(self) -> dict[str, str]:
        return {key: str(getattr(self, attr)) for attr, key in _FIELDS.items()}

    @classmethod
    def from_json(cls, data: object) -> "Config":
        if not isinstance(data, dict):
            raise ValueError("Config must be a JSON object")
        values = {}
        for attr, key in _FIELDS.items():
            value = data.get(key)
            if not isinstance(value, str):
                raise ValueError(f"Config field '{key}' must be a string")
            values[attr] = Path(value)
        return cls(**values)


@dataclass(frozen=True)
class ConfigLoaded:
    config: Config
    path: Path


@dataclass(frozen=True)
class ConfigBootstrapped:
    path: Path


ConfigResult = ConfigLoaded | ConfigBootstrapped


def executable_dir() -> Path:
    """Folder of the frozen executable, or the working directory."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path.cwd()


def default_config_path() -> Path:
    return executable_dir() / CONFIG_FILE


def default_config() -> Config:
    """Return platform-specific default paths.

    Windows:  %LOCALAPPDATA%\\GeometryDash and the default Steam library.
    Other:    the same locations inside the Steam/Proton prefix.
    """
    backup_root = Path.home() / "Documents" / "GD_Backups"
    if platform.system() == "Windows":
        local = os.environ.get("LOCALAPPDATA") or str(
            Path.home() / "AppData" / "Local"
        )
        return Config(
            save_dir=Path(local) / "GeometryDash",
            assets_dir=Path(
                r"C:\Program Files (x86)\Steam\steamapps\common\Geometry Dash"
            ),
            backup_root=backup_root,
        )

    steam = Path.home() / ".local" / "share" / "Steam" / "steamapps"
    return Config(
        save_dir=(
            steam / "compatdata" / "322170" / "pfx" / "drive_c" / "users"
            / "steamuser" / "AppData" / "Local" / "GeometryDash"
        ),
        assets_dir=steam / "common" / "Geometry Dash",
        backup_root=backup_root,
    )


def save_config(config: Config, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.to_json(), indent=2) + "\n", "utf-8")


def load_config(path: Path | None = None) -> ConfigResult:
    """Load settings from *path*, writing defaults if it does not exist.

    Returns ``ConfigBootstrapped`` after writing defaults so the caller can
    stop and let the operator review them.  Malformed JSON raises
    ``json.JSONDecodeError``; a wrongly shaped file raises ``ValueError``.
    """
    path = path or default_config_path()
    if not path.exists():
        save_config(default_config(), path)
        log.info("Created %s - please review paths, then run again.", path)
        return ConfigBootstrapped(path)

    data = json.loads(path.read_text("utf-8"))
    return ConfigLoaded(Config.from_json(data), path)
