from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .metadata import DEFAULT_METADATA, SiteMetadata, metadata_from_mapping


class ConfigError(RuntimeError):
    pass


DEFAULT_ICONS_DIR = "node_modules/@tabler/icons/icons/outline"
DEFAULT_OUTPUT_DIR = "public/icons"
DEFAULT_INLINE_SIZE = 16
DEFAULT_CURSOR_SIZE = 32
DEFAULT_INLINE_CLASS = "w-4 h-4"

DEFAULT_INLINE_ICONS: Dict[str, str] = {
    "externalLink": "external-link",
    "linkedin": "brand-linkedin",
    "instagram": "brand-instagram",
}

DEFAULT_CURSORS: Dict[str, str] = {
    "arrow-left": "circle-arrow-left",
    "arrow-right": "circle-arrow-right",
}

CONFIG_FILENAME = "sitectl.yaml"


@dataclass
class Config:
    icons_dir: Path = field(default_factory=lambda: Path(DEFAULT_ICONS_DIR))
    output_dir: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT_DIR))
    data_dir: Optional[Path] = None
    inline_size: int = DEFAULT_INLINE_SIZE
    cursor_size: int = DEFAULT_CURSOR_SIZE
    inline_class: str = DEFAULT_INLINE_CLASS
    inline_icons: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_INLINE_ICONS))
    cursors: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_CURSORS))
    metadata: SiteMetadata = DEFAULT_METADATA
    source_path: Optional[Path] = None

    def to_json(self) -> str:
        def _default(o: Any):
            if isinstance(o, Path):
                return str(o)
            if isinstance(o, SiteMetadata):
                return o.to_dict()
            if hasattr(o, "__dict__"):
                return o.__dict__
            return str(o)

        return json.dumps(self, default=_default, indent=2, sort_keys=True)


def _expand_env(value: Any) -> Any:
    if isinstance(value, str):
        # Expand ${VAR} style
        return os.path.expandvars(value)
    if isinstance(value, dict):
        return {k: _expand_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env(v) for v in value]
    return value


def _as_size(key: str, raw: Any, default: int) -> int:
    if raw is None:
        return default
    # bool is an int subclass; `inline_size: yes` is a typo, not a size
    if isinstance(raw, bool) or not isinstance(raw, int) or raw <= 0:
        raise ConfigError(f"{key} must be a positive integer, got {raw!r}")
    return raw


def _as_name_map(key: str, raw: Any, default: Mapping[str, str], *, filenames: bool = False) -> Dict[str, str]:
    if raw is None:
        return dict(default)
    if not isinstance(raw, dict):
        raise ConfigError(f"{key} must be a mapping of name -> icon")
    out: Dict[str, str] = {}
    for name, icon in raw.items():
        if not isinstance(name, str) or not isinstance(icon, str) or not icon.strip():
            raise ConfigError(f"{key}: invalid entry {name!r}: {icon!r}")
        # cursor names become <output_dir>/<name>.svg
        if filenames and (not name.strip() or "/" in name or "\\" in name):
            raise ConfigError(f"{key}: name {name!r} must be a plain file name (no path separators)")
        out[name] = icon.strip()
    return out


def _as_path(raw: Any, default: Optional[str]) -> Optional[Path]:
    if raw is None:
        return Path(default) if default is not None else None
    return Path(str(raw)).expanduser()


def resolve_config_path() -> Optional[Path]:
    """Locate the config file, or return None to run on built-in defaults."""
    # Highest priority: explicit override
    override = os.environ.get("SITECTL_CONFIG")
    if override:
        p = Path(override).expanduser()
        if p.is_file():
            return p
        raise ConfigError(f"SITECTL_CONFIG path not found: {p}")

    candidates = [Path.cwd() / CONFIG_FILENAME]

    # XDG base dirs
    xdg_home = Path(os.environ.get("XDG_CONFIG_HOME", "~/.config")).expanduser()
    candidates.append(xdg_home / "sitectl" / "config.yaml")

    xdg_dirs = os.environ.get("XDG_CONFIG_DIRS", "/etc/xdg")
    for d in xdg_dirs.split(":"):
        if d:
            candidates.append(Path(d) / "sitectl" / "config.yaml")

    for c in candidates:
        if c.is_file():
            return c
    return None


def load_config(path: Optional[Path] = None) -> Config:
    cfg_path = path or resolve_config_path()
    if cfg_path is None:
        return Config()

    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    except FileNotFoundError as e:
        raise ConfigError(str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {cfg_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{cfg_path}: top level must be a mapping")

    data = _expand_env(data)

    metadata_raw = data.get("metadata") or {}
    if not isinstance(metadata_raw, dict):
        raise ConfigError("metadata must be a mapping")
    try:
        metadata = metadata_from_mapping(metadata_raw)
    except ValueError as e:
        raise ConfigError(f"metadata: {e}") from e

    cfg = Config(
        icons_dir=_as_path(data.get("icons_dir"), DEFAULT_ICONS_DIR),
        output_dir=_as_path(data.get("output_dir"), DEFAULT_OUTPUT_DIR),
        data_dir=_as_path(data.get("data_dir"), None),
        inline_size=_as_size("inline_size", data.get("inline_size"), DEFAULT_INLINE_SIZE),
        cursor_size=_as_size("cursor_size", data.get("cursor_size"), DEFAULT_CURSOR_SIZE),
        inline_class=str(data.get("inline_class") or DEFAULT_INLINE_CLASS),
        inline_icons=_as_name_map("inline_icons", data.get("inline_icons"), DEFAULT_INLINE_ICONS),
        cursors=_as_name_map("cursors", data.get("cursors"), DEFAULT_CURSORS, filenames=True),
        metadata=metadata,
        source_path=cfg_path,
    )
    return cfg
