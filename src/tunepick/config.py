"""Configuration: JSON file with TUNEPICK_* env overrides."""

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger("tunepick.config")

# Module-level cache for singleton pattern
_config_cache: "Config | None" = None


def clear_config_cache() -> None:
    """Clear the config cache. Useful for testing or config reload."""
    global _config_cache
    _config_cache = None


def get_default_config_dir() -> Path:
    """Get default config directory, respecting TUNEPICK_CONFIG_DIR env var."""
    config_dir = os.environ.get("TUNEPICK_CONFIG_DIR")
    if config_dir:
        return Path(config_dir)
    return Path.home() / ".config" / "tunepick"


class Config:
    """Runtime configuration with env override support."""

    DEFAULTS: dict[str, Any] = {
        "menu_title": "Select an option",
        "search_limit": 10,
        "mpv_path": "mpv",
        "ytdlp_path": "yt-dlp",
        "audio_format": "mp3",
        "use_aria2c": True,
        "download_dir": "~/Music",
        "cookies_file": "",  # Empty = no cookies
    }

    def __init__(self, config_dir: Path | None = None):
        self._config_dir = config_dir or get_default_config_dir()
        self._config_file = self._config_dir / "config.json"
        self._data: dict[str, Any] = {}

    @classmethod
    def load(cls, config_dir: Path | None = None) -> "Config":
        """Factory method - explicit loading with caching."""
        global _config_cache

        if _config_cache is not None and config_dir is None:
            return _config_cache

        config = cls(config_dir)
        config._load_from_file()
        config._apply_env_overrides()

        if config_dir is None:
            _config_cache = config

        return config

    def __getattr__(self, name: str) -> Any:
        """Access config values as attributes."""
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._data:
            return self._data[name]
        if name in self.DEFAULTS:
            return self.DEFAULTS[name]
        raise AttributeError(f"Config has no attribute '{name}'")

    @property
    def download_path(self) -> Path:
        return Path(os.path.expanduser(self.download_dir))

    @property
    def cookies_path(self) -> Path | None:
        return Path(os.path.expanduser(self.cookies_file)) if self.cookies_file else None

    @property
    def config_file(self) -> Path:
        return self._config_file

    def items(self) -> list[tuple[str, Any]]:
        """Return (key, effective value) for every known setting."""
        return [(key, getattr(self, key)) for key in self.DEFAULTS]

    def set(self, key: str, value: Any) -> None:
        """Set value and persist."""
        self._data[key] = value
        self._save()

    def set_from_string(self, key: str, raw: str) -> Any:
        """Coerce a CLI string to the setting's type, persist it and return it.

        Raises:
            KeyError: unknown setting.
            ValueError: value can't be converted.
        """
        if key not in self.DEFAULTS:
            raise KeyError(key)
        value = self._coerce(raw, type(self.DEFAULTS[key]))
        self.set(key, value)
        return value

    def _load_from_file(self) -> None:
        if self._config_file.exists():
            try:
                content = self._config_file.read_text()
                if content.strip():
                    self._data = json.loads(content)
            except json.JSONDecodeError:
                # Corrupted config - use defaults, will be fixed on next save
                self._data = {}

    def _save(self) -> None:
        self._config_dir.mkdir(parents=True, exist_ok=True)
        self._config_file.write_text(json.dumps(self._data, indent=2))

    def _apply_env_overrides(self) -> None:
        """Apply TUNEPICK_* env vars (highest priority)."""
        for key, default in self.DEFAULTS.items():
            env_key = f"TUNEPICK_{key.upper()}"
            if env_key in os.environ:
                try:
                    self._data[key] = self._coerce(os.environ[env_key], type(default))
                except ValueError:
                    logger.warning(
                        "Ignoring %s=%r: expected %s", env_key, os.environ[env_key], type(default).__name__
                    )

    @staticmethod
    def _coerce(value: str, target_type: type) -> Any:
        """Coerce string env/CLI value to target type."""
        if target_type is bool:
            if value.lower() in ("true", "1", "yes", "on"):
                return True
            if value.lower() in ("false", "0", "no", "off"):
                return False
            raise ValueError(f"not a boolean: {value!r}")
        if target_type is int:
            return int(value)
        return value
