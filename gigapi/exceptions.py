#  Copyright ©  2025 SRI International.
#  This work is licensed under CC BY-NC-ND 4.0 license.
#  To view a copy of this license, visit https://creativecommons.org/licenses/by-nc-nd/4.0/

from dataclasses import dataclass
from enum import IntEnum
from typing import *

class ConfigError(Exception):
    """Base class for all configuration-related exceptions."""
    pass

class SourceUnavailable(ConfigError):
    """Raised when a configuration file was requested but cannot be opened."""
    def __init__(self, path: str, reason: str):
        super().__init__(f"error reading config file {path}: {reason}")
        self.path = path
        self.reason = reason

class SourceUnparsable(ConfigError):
    """Raised when a configuration file is malformed for its format."""
    def __init__(self, path: str, reason: str):
        super().__init__(f"error parsing config file {path}: {reason}")
        self.path = path
        self.reason = reason

class ConfigNotInitialized(ConfigError):
    """Raised when the process-wide configuration is read before init_config()."""
    pass

class FrozenConfigError(ConfigError, AttributeError):
    """Raised on assignment to a resolved (frozen) configuration record."""
    pass

class IssueCode(IntEnum):
    """Non-fatal problems found while resolving; collected, logged, never raised."""
    FIELD_COERCION_FAILURE = 0x1
    DEFAULT_COERCION_FAILURE = 0x2
    LAYER_TTL_INVALID = 0x3
    LAYER_TYPE_UNKNOWN = 0x4
    LAYER_ENTRY_INVALID = 0x5

@dataclass(frozen=True)
class ConfigIssue:
    code: IssueCode
    key: str
    value: Any
    message: str

    def __str__(self) -> str:
        return f"{self.code.name} [{self.key}={self.value!r}]: {self.message}"
