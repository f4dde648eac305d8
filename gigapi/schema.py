#  Copyright ©  2025 SRI International.
#  This work is licensed under CC BY-NC-ND 4.0 license.
#  To view a copy of this license, visit https://creativecommons.org/licenses/by-nc-nd/4.0/
import keyword
from dataclasses import dataclass
from typing import *

from .coercion import FieldKind, coerce
from .exceptions import ConfigIssue, IssueCode

@dataclass(frozen=True)
class FieldSpec:
    """
    One leaf of the configuration tree.

    key:     dotted path, also the file key and (upper-cased, '.' -> '_') the env var name
    kind:    how raw text is coerced
    default: declared default in the same textual form as an env var; "" means none
    """
    key: str
    kind: FieldKind
    default: str = ""
    doc: str = ""

    @property
    def attr_path(self) -> tuple[str, ...]:
        return attr_path(self.key)


def attr_path(key: str) -> tuple[str, ...]:
    """'gigapi.layers.global' -> ('gigapi', 'layers', 'global_')"""
    return tuple(p + "_" if keyword.iskeyword(p) else p for p in key.split("."))


# ----- Root schema (everything except the dynamic layer list) -----
FIELD_REGISTRY: list[FieldSpec] = [
    FieldSpec("gigapi.root", FieldKind.STRING, "", doc="Root folder for all the data files"),
    FieldSpec("gigapi.merge_timeout_s", FieldKind.INT, "10", doc="Base timeout between merges"),
    FieldSpec("gigapi.save_timeout_s", FieldKind.FLOAT, "1", doc="Timeout before saving the new data to the disk"),
    FieldSpec("gigapi.no_merges", FieldKind.BOOL, "false", doc="Disable merging"),
    FieldSpec("gigapi.ui", FieldKind.BOOL, "true", doc="Enable UI for querier"),
    FieldSpec("gigapi.mode", FieldKind.STRING, "aio", doc="Execution mode (readonly, writeonly, compaction, aio)"),
    FieldSpec("gigapi.metadata.type", FieldKind.STRING, "json", doc="Type of metadata storage (json or redis)"),
    FieldSpec("gigapi.metadata.url", FieldKind.STRING, "", doc="Redis url for redis metadata storage"),
    FieldSpec("http.port", FieldKind.INT, "7971", doc="Port to listen on"),
    FieldSpec("http.host", FieldKind.STRING, "0.0.0.0", doc="Host to bind to (0.0.0.0 for all interfaces)"),
    FieldSpec("http.basic_auth.username", FieldKind.STRING, ""),
    FieldSpec("http.basic_auth.password", FieldKind.STRING, ""),
    FieldSpec("flightsql.port", FieldKind.INT, "8082", doc="Port to run flightSQL server"),
    FieldSpec("flightsql.enable", FieldKind.BOOL, "true", doc="Enable FlightSQL server"),
    FieldSpec("loglevel", FieldKind.STRING, "info", doc="Log level (debug, info, warn, error, fatal)"),
]

# ----- Layer entry schema, keys relative to one entry -----
LAYERS_KEY = "gigapi.layers"
LAYER_REGISTRY: list[FieldSpec] = [
    FieldSpec("name", FieldKind.STRING, doc="Name of the layer"),
    FieldSpec("type", FieldKind.STRING, doc="Type of the layer (s3, fs)"),
    FieldSpec("global", FieldKind.BOOL, doc="If the layer is local for writer or global"),
    FieldSpec("url", FieldKind.STRING, doc="URL of the layer"),
    FieldSpec("auth.key", FieldKind.STRING, doc="Key for authentication"),
    FieldSpec("auth.secret", FieldKind.STRING, doc="Secret for authentication"),
    FieldSpec("ttl", FieldKind.DURATION, doc="How long to keep data before moving to the next layer (0 for unlimited); "
              "a bare number in a file is seconds"),
]
LAYER_DISCOVERY_FIELD = "name"

MIN_SAVE_TIMEOUT_S = 1.0


def check_registry(registry: Iterable[FieldSpec]) -> list[ConfigIssue]:
    """Report every declared default that does not parse as its own kind."""
    issues = []
    for spec in registry:
        if spec.default == "":
            continue
        try:
            coerce(spec.kind, spec.default)
        except ValueError as e:
            issues.append(ConfigIssue(IssueCode.DEFAULT_COERCION_FAILURE, spec.key, spec.default,
                                      f"declared default is not a valid {spec.kind.value}: {e}"))
    return issues
