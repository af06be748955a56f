"""Run configuration, optionally loaded from a TOML file::

    [backlinker]
    content   = "content/posts"
    dest      = "content/posts"     # defaults to content
    graph     = "artifacts/links.json"
    log_level = "INFO"

Command-line flags override anything set in the file.  Keys other than
these four are ignored.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from backlinker.errors import ConfigError

LOG_LEVELS = frozenset(logging.getLevelNamesMapping())


def _check_log_level(value: Any) -> str:
    level = str(value).upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"unknown log_level {value!r} (expected one of {', '.join(sorted(LOG_LEVELS))})")
    return level


@dataclass
class BacklinkerConfig:
    content_dir: Path | None = None
    dest_dir: Path | None = None
    graph_path: Path | None = None
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BacklinkerConfig":
        section = data.get("backlinker", data)

        def _path(key: str) -> Path | None:
            value = section.get(key)
            return Path(value) if value else None

        return cls(
            content_dir=_path("content"),
            dest_dir=_path("dest"),
            graph_path=_path("graph"),
            log_level=_check_log_level(section.get("log_level", "INFO")),
        )

    @property
    def output_dir(self) -> Path | None:
        """Where notes are written: ``dest_dir``, falling back to ``content_dir``."""
        return self.dest_dir or self.content_dir

    def merge(self, **overrides: Any) -> "BacklinkerConfig":
        """Return a copy with every non-``None`` override applied."""
        values = {
            "content_dir": self.content_dir,
            "dest_dir": self.dest_dir,
            "graph_path": self.graph_path,
            "log_level": self.log_level,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return BacklinkerConfig(**values)


def load_config(path: Path) -> BacklinkerConfig:
    """Load a :class:`BacklinkerConfig` from a TOML file.

    Raises :class:`ConfigError` for unparsable TOML or bad values.
    """
    with open(path, "rb") as fh:
        try:
            data = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML: {exc}", str(path)) from exc
    try:
        return BacklinkerConfig.from_dict(data)
    except ConfigError as exc:
        raise ConfigError(str(exc), str(path)) from exc
