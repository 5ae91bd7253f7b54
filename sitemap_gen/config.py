"""
Loading and validation of the SitemapGen crawl configuration.
Pydantic describes the schema; YAML or JSON files and CLI overrides feed it.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, FrozenSet, Literal, Mapping, Optional, Union
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

ChangeFreq = Literal["always", "hourly", "daily", "weekly", "monthly", "yearly", "never"]


class CrawlerConfig(BaseModel):
    """Configuration for a single crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = Field(..., description="Root URL of the site to crawl.")
    exclude: FrozenSet[str] = Field(default_factory=frozenset, description="Path prefixes never crawled.")
    max_redirects: int = Field(5, ge=1, description="Redirect hops followed per request.")
    timeout: Optional[float] = Field(None, gt=0, description="Per-request total timeout (seconds).")
    user_agent: str = Field("SitemapGen/1.0", min_length=1, description="User-Agent header.")
    output: Path = Field(Path("sitemap.xml"), description="Sitemap destination file.")
    changefreq: ChangeFreq = Field("monthly", description="<changefreq> of every entry.")
    priority: float = Field(0.5, ge=0.0, le=1.0, description="<priority> of every entry.")

    @field_validator("base_url", mode="before")
    def _check_base_url(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"base_url must be an absolute http(s) URL, got {v!r}")
        # "https://example.com/" + "/a" would otherwise give a double slash
        return v[:-1] if v.endswith("/") else v


_DEFAULT_CFG = Path("configs/default.yaml")


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


def _read_file(path_obj: Path) -> dict[str, Any]:
    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(
    path: Union[str, Path, None] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> CrawlerConfig:
    """
    Read YAML or JSON, apply *overrides* and return a validated CrawlerConfig.

    Without *path* the default ``configs/default.yaml`` is used when present;
    otherwise the configuration comes from *overrides* alone. Override values
    equal to ``None`` are ignored so that unset CLI options keep file values.
    """
    data: Dict[str, Any] = {}
    if path is None:
        if _DEFAULT_CFG.is_file():
            data = _read_file(_DEFAULT_CFG)
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
        data = _read_file(path_obj)

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    return CrawlerConfig(**data)


__all__ = ["CrawlerConfig", "ChangeFreq", "load_config"]
