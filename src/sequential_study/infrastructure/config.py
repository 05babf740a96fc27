"""Configuration dataclasses for the sequential study flow.

Each config is a frozen ``dataclass`` with a ``validate()`` method that
raises ``ValueError`` on invalid values, plus ``to_dict`` / ``from_dict``
helpers.  Transition timings live here rather than in the controller:
they only matter to a rendering surface.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml


# ===================================================================== #
#  Transition Configuration                                              #
# ===================================================================== #

@dataclass(frozen=True)
class TransitionConfig:
    """Durations of the fade transitions around section navigation.

    Attributes
    ----------
    exit_duration_ms:
        Fade-out time before the section index changes.
    entry_duration_ms:
        Fade-in time after the new section has been rendered.
    """

    exit_duration_ms: int = 400
    entry_duration_ms: int = 500

    def validate(self) -> None:
        if self.exit_duration_ms < 0:
            raise ValueError(
                f"exit_duration_ms must be >= 0, got {self.exit_duration_ms}"
            )
        if self.entry_duration_ms < 0:
            raise ValueError(
                f"entry_duration_ms must be >= 0, got {self.entry_duration_ms}"
            )

    @property
    def exit_seconds(self) -> float:
        return self.exit_duration_ms / 1000.0

    @property
    def entry_seconds(self) -> float:
        return self.entry_duration_ms / 1000.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TransitionConfig:
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        cfg = cls(**filtered)
        cfg.validate()
        return cfg


# ===================================================================== #
#  Dev Server Configuration                                              #
# ===================================================================== #

@dataclass(frozen=True)
class DevServerConfig:
    """Parameters for the local development server.

    Attributes
    ----------
    root:
        Directory served as the site root.  Page rewrites resolve under
        ``<root>/pages``.
    host:
        Interface to bind.
    port:
        TCP port (``PORT`` environment variable when built via
        :meth:`from_env`).
    api_base:
        Backend URL advertised by the mock auth module.
    """

    root: str = "."
    host: str = "127.0.0.1"
    port: int = 5500
    api_base: str = "http://localhost:3000"

    def validate(self) -> None:
        if not (0 < self.port < 65536):
            raise ValueError(f"port must be in [1, 65535], got {self.port}")
        if not self.root:
            raise ValueError("root must not be empty")

    @property
    def root_path(self) -> Path:
        return Path(self.root).resolve()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DevServerConfig:
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        if "port" in filtered:
            filtered["port"] = int(filtered["port"])
        cfg = cls(**filtered)
        cfg.validate()
        return cfg

    @classmethod
    def from_env(cls, root: str = ".", environ: Mapping[str, str] | None = None) -> DevServerConfig:
        """Build a config honouring the ``PORT`` environment variable."""
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {"root": root}
        if env.get("PORT"):
            data["port"] = env["PORT"]
        return cls.from_dict(data)


# ===================================================================== #
#  Unified config loader                                                 #
# ===================================================================== #

_CONFIG_MAP: dict[str, type] = {
    "transition": TransitionConfig,
    "dev_server": DevServerConfig,
}


def _build_sections(raw: Any) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise ValueError("Top-level config must be an object")
    result: dict[str, Any] = {}
    for section, data in raw.items():
        cls = _CONFIG_MAP.get(section)
        if cls is not None and isinstance(data, dict):
            result[section] = cls.from_dict(data)
        else:
            result[section] = data
    return result


def load_config_from_json(json_str: str) -> dict[str, Any]:
    """Parse a JSON string into a dict of typed config objects.

    Top-level keys name config sections (``transition``, ``dev_server``).
    Unknown sections are preserved as raw values.
    """
    return _build_sections(json.loads(json_str))


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Load a ``.json``, ``.yaml`` or ``.yml`` config file."""
    p = Path(path)
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in (".yaml", ".yml"):
        return _build_sections(yaml.safe_load(text))
    return load_config_from_json(text)
