# === FILE: link_scout/config.py ===
"""
Loading and validation of LinkScout run settings.

Pydantic describes the schema; values come from an optional YAML/JSON file
merged with command-line overrides.
"""
from __future__ import annotations

import errno
import json
import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from link_scout.errors import PatternError

DEFAULT_CONCURRENCY = 4
DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; LinkScout/0.1; dead link checker)"


class LinkConfig(BaseModel):
    """Settings shared by every command that fetches the seed page."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    url: str = Field(..., min_length=1, description="Seed page; http:// is assumed without a scheme.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="User-Agent header.")
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="Per-request timeout (seconds).")
    ignore_pattern: Optional[str] = Field(None, description="Regex; matching links are skipped.")
    truncate_fragments: bool = Field(True, description="Drop #fragments before deduplication.")
    verify_tls: bool = Field(True, description="Verify TLS certificates.")

    @field_validator("url", mode="before")
    def _strip_url(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("ignore_pattern")
    def _check_pattern(cls, v: Optional[str]) -> Optional[str]:
        # PatternError is not a ValueError, so pydantic lets it through unwrapped
        if v is not None:
            try:
                re.compile(v)
            except re.error as exc:
                raise PatternError(v, str(exc)) from exc
        return v

    @property
    def ignore_regex(self) -> Optional[re.Pattern[str]]:
        return re.compile(self.ignore_pattern) if self.ignore_pattern is not None else None


class CheckConfig(LinkConfig):
    """Configuration of one ``check`` run."""

    concurrency: int = Field(DEFAULT_CONCURRENCY, ge=1, description="Parallel requests per host.")
    show_ok: bool = Field(False, description="Also report reachable links.")


class DumpConfig(LinkConfig):
    """Configuration of one ``dump`` run."""

    output_file: Path = Field(..., description="File the discovered links are written to.")


ConfigT = TypeVar("ConfigT", bound=LinkConfig)

_KNOWN_KEYS = frozenset(CheckConfig.model_fields) | frozenset(DumpConfig.model_fields)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a YAML or JSON settings file and return its raw mapping.
    Raises FileNotFoundError when the file does not exist.
    """
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def build_config(
    model: Type[ConfigT],
    path: Union[str, Path, None] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> ConfigT:
    """Merge file values with non-``None`` overrides and validate them as *model*.

    One file may serve both commands: keys belonging to another command are
    ignored, keys no command knows are an error.
    """
    file_data: Dict[str, Any] = load_config(path) if path is not None else {}
    unknown = sorted(set(file_data) - _KNOWN_KEYS)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    data = {k: v for k, v in file_data.items() if k in model.model_fields}
    data.update({k: v for k, v in (overrides or {}).items() if v is not None})
    return model(**data)


__all__ = [
    "LinkConfig",
    "CheckConfig",
    "DumpConfig",
    "load_config",
    "build_config",
    "DEFAULT_CONCURRENCY",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
]
