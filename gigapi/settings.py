#  Copyright ©  2025 SRI International.
#  This work is licensed under CC BY-NC-ND 4.0 license.
#  To view a copy of this license, visit https://creativecommons.org/licenses/by-nc-nd/4.0/
import os
from dataclasses import dataclass, field
from typing import *

from .config_loader import load_sources
from .configuration import Configuration, resolve
from .exceptions import ConfigError, ConfigIssue, ConfigNotInitialized
from .logger import get_logger
from .schema import FieldSpec, FIELD_REGISTRY

_store: Optional["ConfigStore"] = None
_log = get_logger("settings")

@dataclass(frozen=True)
class ConfigStore:
    config: Configuration
    source: str                                              # file path, or "env"
    issues: tuple[ConfigIssue, ...] = field(default_factory=tuple)  # non-fatal, already logged

    @property
    def ok(self) -> bool:
        return not self.issues


def load_configuration(path: str | os.PathLike | None = "",
                       environ: Mapping[str, str] | None = None,
                       registry: Iterable[FieldSpec] = FIELD_REGISTRY) -> ConfigStore:
    """
    Resolve file + environment + defaults into a frozen ConfigStore without
    touching the process-wide handle. SourceUnavailable/SourceUnparsable propagate.
    """
    sources = load_sources(path, environ)
    config, issues = resolve(sources, registry)
    return ConfigStore(config=config.freeze(), source=sources.source_name, issues=tuple(issues))


def init_config(path: str | os.PathLike | None = "") -> ConfigStore:
    """
    Process entry point: resolve once and install the result for get_config().
    Must complete before any reader starts; a second call is an error.
    """
    global _store
    if _store is not None:
        raise ConfigError(f"configuration already initialized from {_store.source}")
    store = load_configuration(path)
    _log.info("Loaded configuration", source=store.source, issues=len(store.issues),
              config=store.config.as_dict(redact=True))
    _store = store
    return store


def get_store() -> ConfigStore:
    if _store is None:
        raise ConfigNotInitialized("init_config() has not been called")
    return _store


def get_config() -> Configuration:
    return get_store().config


def reset_config() -> None:
    """Drop the process-wide handle so a test can call init_config() again."""
    global _store
    _store = None
