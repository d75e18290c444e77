"""Configuration: the `.autocommitrc` file, validation and credential resolution."""

import json
import os
import sys
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional, Union

from autocommit import MAX_DETAIL_LENGTH, MAX_RANKED_FILES, MAX_SUBJECT_LENGTH

# Accepted values for enum-like settings
VALID_PROVIDERS = {"gemini", "claude", "ollama"}
VALID_MODES = {"narrative", "evidence"}

# Providers that run locally and need no API key
LOCAL_PROVIDERS = {"ollama"}

# Provider-specific key variables, checked after AUTOCOMMIT_API_KEY
PROVIDER_KEY_ENV = {
    "gemini": "GEMINI_API_KEY",
    "claude": "ANTHROPIC_API_KEY",
}

# Values people leave in place of a real key
PLACEHOLDER_KEYS = {"", "xxx-xxx-xxx", "your-key-here"}

# Limits may be lowered in the config file but never raised
LIMIT_CEILINGS = {
    "max_subject_length": MAX_SUBJECT_LENGTH,
    "max_detail_length": MAX_DETAIL_LENGTH,
    "max_ranked_files": MAX_RANKED_FILES,
}


@dataclass
class Config:
    """User configuration with sensible defaults."""
    provider: str = "gemini"
    model: Optional[str] = None
    api_key: Optional[str] = None
    mode: str = "narrative"
    max_subject_length: int = MAX_SUBJECT_LENGTH
    max_detail_length: int = MAX_DETAIL_LENGTH
    max_ranked_files: int = MAX_RANKED_FILES
    timeout: int = 60  # seconds, per external call

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Reset invalid fields to their defaults and describe each reset.

        Returns one warning string per field that was replaced.
        """
        warnings = []
        defaults = Config()

        if self.provider not in VALID_PROVIDERS:
            warnings.append(f"Invalid provider '{self.provider}', using '{defaults.provider}'")
            self.provider = defaults.provider

        if self.mode not in VALID_MODES:
            warnings.append(f"Invalid mode '{self.mode}', using '{defaults.mode}'")
            self.mode = defaults.mode

        for name in ("max_subject_length", "max_detail_length", "max_ranked_files", "timeout"):
            value = getattr(self, name)
            ceiling = LIMIT_CEILINGS.get(name)
            if (isinstance(value, bool) or not isinstance(value, int) or value <= 0
                    or (ceiling is not None and value > ceiling)):
                default = getattr(defaults, name)
                warnings.append(f"Invalid {name} '{value}', using {default}")
                setattr(self, name, default)

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """Build a validated Config, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        config = cls(**{k: v for k, v in data.items() if k in known})
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


@dataclass(frozen=True)
class CredentialPresent:
    value: Optional[str]  # None for local providers
    source: str


@dataclass(frozen=True)
class CredentialAbsent:
    reason: str


Credential = Union[CredentialPresent, CredentialAbsent]


def _usable(key: Optional[str]) -> bool:
    return key is not None and key.strip() not in PLACEHOLDER_KEYS


def resolve_credential(config: Config, environ: Optional[dict] = None) -> Credential:
    """Find the API key for the configured provider.

    Precedence: AUTOCOMMIT_API_KEY > provider variable > config file.
    """
    env = os.environ if environ is None else environ

    if config.provider in LOCAL_PROVIDERS:
        return CredentialPresent(value=None, source="local provider")

    candidates = [("AUTOCOMMIT_API_KEY", env.get("AUTOCOMMIT_API_KEY"))]
    provider_var = PROVIDER_KEY_ENV.get(config.provider)
    if provider_var:
        candidates.append((provider_var, env.get(provider_var)))
    candidates.append(("config file", config.api_key))

    for source, key in candidates:
        if _usable(key):
            return CredentialPresent(value=key.strip(), source=source)

    hint = f"AUTOCOMMIT_API_KEY or {provider_var}" if provider_var else "AUTOCOMMIT_API_KEY"
    return CredentialAbsent(
        reason=f"No API key configured for {config.provider}. Set {hint}, or run: autocommit --setup"
    )


class ConfigManager:
    """Finds, loads and saves `.autocommitrc`.

    The first file found wins: the current directory, then the home directory.
    A file that can't be read falls back to defaults with a warning.
    """

    CONFIG_FILENAME = ".autocommitrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def search_paths(self) -> list[Path]:
        return [Path.cwd() / self.CONFIG_FILENAME, Path.home() / self.CONFIG_FILENAME]

    def load(self) -> Config:
        if self._config is None:
            self._config_path = next((p for p in self.search_paths() if p.is_file()), None)
            self._config = self._read(self._config_path) if self._config_path else Config()
        return self._config

    @staticmethod
    def _read(path: Path) -> Config:
        try:
            data = json.loads(path.read_text(encoding='utf-8'))
        except (json.JSONDecodeError, OSError) as e:
            print(f"Config warning: could not read {path}: {e}", file=sys.stderr)
            return Config()
        if not isinstance(data, dict):
            print(f"Config warning: {path} must hold a JSON object", file=sys.stderr)
            return Config()
        return Config.from_dict(data)

    def save(self, config: Config, global_config: bool = True) -> Path:
        local, home = self.search_paths()
        path = home if global_config else local
        path.write_text(json.dumps(config.to_dict(), indent=2) + "\n", encoding='utf-8')
        if config.api_key:
            # The file holds a secret
            os.chmod(path, 0o600)
        self._config, self._config_path = config, path
        return path

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def save_config(config: Config, global_config: bool = True) -> Path:
    return _manager.save(config, global_config)


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "Credential",
    "CredentialPresent",
    "CredentialAbsent",
    "resolve_credential",
    "load_config",
    "save_config",
    "get_config_path",
    "VALID_PROVIDERS",
    "VALID_MODES",
    "LOCAL_PROVIDERS",
]
