#  Copyright ©  2025 SRI International.
#  This work is licensed under CC BY-NC-ND 4.0 license.
#  To view a copy of this license, visit https://creativecommons.org/licenses/by-nc-nd/4.0/
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
import tomllib
from typing import *

import yaml

from .exceptions import SourceUnavailable, SourceUnparsable
from .logger import get_logger

SOURCE_FILE = "file"
SOURCE_ENV = "env"

_log = get_logger("loader")


def _parse_toml(data: bytes) -> Any:
    return tomllib.loads(data.decode("utf-8"))

def _parse_yaml(data: bytes) -> Any:
    doc = yaml.safe_load(data.decode("utf-8"))
    return {} if doc is None else doc

def _parse_json(data: bytes) -> Any:
    return json.loads(data.decode("utf-8"))

PARSERS_BY_SUFFIX: dict[str, Callable[[bytes], Any]] = {
    ".toml": _parse_toml,
    ".yaml": _parse_yaml,
    ".yml": _parse_yaml,
    ".json": _parse_json,
}
PARSE_ERRORS = (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError)


def load_file(path: str | os.PathLike) -> dict[str, Any]:
    """
    Read a structured configuration file, format chosen by extension.
    Raises SourceUnavailable if it cannot be read and SourceUnparsable if it
    is not a mapping in a supported format.
    """
    p = Path(path)
    parser = PARSERS_BY_SUFFIX.get(p.suffix.lower())
    if parser is None:
        raise SourceUnparsable(str(p), f"unsupported config file extension {p.suffix!r} "
                                       f"(expected one of {', '.join(PARSERS_BY_SUFFIX)})")
    try:
        data = p.read_bytes()
    except OSError as e:
        raise SourceUnavailable(str(p), e.strerror or str(e)) from e
    try:
        doc = parser(data)
    except PARSE_ERRORS as e:
        raise SourceUnparsable(str(p), str(e)) from e
    if not isinstance(doc, Mapping):
        raise SourceUnparsable(str(p), f"top level must be a mapping, got {type(doc).__name__}")
    return dict(doc)


def flatten(mapping: Mapping, prefix: str = "") -> dict[str, Any]:
    """
    {"gigapi": {"metadata": {"type": "redis"}}} -> {"gigapi.metadata.type": "redis"}
    Keys are lower-cased; lists and scalars are leaves.
    """
    out: dict[str, Any] = {}
    for k, v in mapping.items():
        key = f"{prefix}{str(k).strip().lower()}"
        if isinstance(v, Mapping):
            out.update(flatten(v, prefix=key + "."))
        else:
            out[key] = v
    return out


def env_key(key: str, prefix: str = "") -> str:
    """
    gigapi.metadata.type -> GIGAPI_METADATA_TYPE
    auth.key, prefix GIGAPI_LAYERS_0_ -> GIGAPI_LAYERS_0_AUTH_KEY
    """
    return prefix + key.replace(".", "_").upper()


def env_lookup(key: str, environ: Mapping[str, str] | None = None, prefix: str = "") -> str | None:
    """Environment value for a dotted key; an empty variable counts as unset."""
    env = os.environ if environ is None else environ
    v = env.get(env_key(key, prefix))
    return v if v else None


@dataclass
class RawSources:
    """Untyped view of everything the binder may read: a flattened file and the environment."""
    file_values: dict[str, Any] = field(default_factory=dict)
    file_path: str = ""
    environ: Mapping[str, str] = field(default_factory=dict)

    @property
    def source_name(self) -> str:
        return self.file_path or SOURCE_ENV

    def env(self, key: str, prefix: str = "") -> str | None:
        return env_lookup(key, self.environ, prefix)

    def lookup(self, key: str) -> tuple[Any, str] | None:
        """(value, source) for a dotted key; environment wins over the file. Empty or null values are unset."""
        v = self.env(key)
        if v is not None:
            return v, SOURCE_ENV
        v = self.file_values.get(key)
        if v is None or v == "":
            return None
        return v, SOURCE_FILE


def load_sources(path: str | os.PathLike | None = "",
                 environ: Mapping[str, str] | None = None) -> RawSources:
    env = dict(os.environ if environ is None else environ)
    if path:
        values = flatten(load_file(path))
        _log.info("Using config file", path=str(path))
        return RawSources(file_values=values, file_path=str(path), environ=env)
    _log.info("Using environment variables for configuration")
    return RawSources(environ=env)
