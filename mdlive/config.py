"""Configuration loader for mdlive.

Configuration is resolved in priority order: **project > user > defaults**.

1. **Project-level** — ``.mdlive.yml`` in (or above) the working directory.
2. **User-level** — ``~/.mdlive/config.yml``.
3. **Built-in defaults** — the Material baseline colors and type scale.

Both files share the same format::

    # .mdlive.yml  or  ~/.mdlive/config.yml
    theme:
      primary: "#6750a4"
      secondary: "#625b71"
      tertiary: "#7d5260"
      title_large: 22
      title_medium: 16
      title_small: 14

    editor:
      list_continuation: true

Project-level values override user-level values.  CLI flags override both.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from pathlib import Path

import yaml
from loguru import logger

from mdlive.theme import ColorScheme, MarkdownTypography, Theme

CONFIG_FILENAME = ".mdlive.yml"
USER_CONFIG_DIR = Path.home() / ".mdlive"
USER_CONFIG_PATH = USER_CONFIG_DIR / "config.yml"

_HEX_COLOR = re.compile(r"#[0-9a-fA-F]{6}")


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class ThemeConfig:
    """Theme sub-configuration (colors as ``#rrggbb``, sizes in sp)."""

    primary: str = ColorScheme.primary
    secondary: str = ColorScheme.secondary
    tertiary: str = ColorScheme.tertiary
    title_large: float = MarkdownTypography.title_large.font_size
    title_medium: float = MarkdownTypography.title_medium.font_size
    title_small: float = MarkdownTypography.title_small.font_size

    def to_theme(self) -> Theme:
        defaults = MarkdownTypography()
        typography = replace(
            defaults,
            title_large=replace(defaults.title_large, font_size=self.title_large),
            title_medium=replace(defaults.title_medium, font_size=self.title_medium),
            title_small=replace(defaults.title_small, font_size=self.title_small),
        )
        colors = ColorScheme(
            primary=self.primary,
            secondary=self.secondary,
            tertiary=self.tertiary,
        )
        return Theme(colors=colors, typography=typography)


@dataclass
class EditorConfig:
    """Editor sub-configuration."""

    list_continuation: bool = True


@dataclass
class MdliveConfig:
    """Top-level configuration container (theme + editor)."""

    theme: ThemeConfig = field(default_factory=ThemeConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)

    # Where the effective config was loaded from (None = defaults only).
    project_config_path: str | None = None
    user_config_path: str | None = None


# ---------------------------------------------------------------------------
# Public loaders
# ---------------------------------------------------------------------------


def load_config(
    search_path: str | None = None,
    config_path: str | Path | None = None,
) -> MdliveConfig:
    """Load merged configuration (project > user > defaults).

    Parameters
    ----------
    search_path:
        Directory to search for ``.mdlive.yml``.  When *None*, only the
        user-level file (and defaults) are considered.
    config_path:
        Explicit config file path.  When given, *only* this file is
        loaded (no project/user search).
    """
    if config_path is not None:
        raw = _load_yaml(Path(config_path).expanduser())
        return _raw_to_config(raw, config_source=str(config_path))

    user_raw = _load_yaml(USER_CONFIG_PATH)
    user_source = str(USER_CONFIG_PATH) if user_raw else None

    project_raw: dict | None = None
    project_source: str | None = None
    if search_path is not None:
        project_path = _find_project_config(search_path)
        if project_path is not None:
            project_raw = _load_yaml(project_path)
            project_source = str(project_path)

    cfg = _raw_to_config(_merge_raw(project_raw, user_raw))
    cfg.project_config_path = project_source
    cfg.user_config_path = user_source
    return cfg


def load_theme(
    search_path: str | None = None,
    config_path: str | Path | None = None,
) -> Theme:
    """Load just the theme portion of the merged config."""
    return load_config(search_path=search_path, config_path=config_path).theme.to_theme()


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _find_project_config(search_path: str) -> Path | None:
    """Search for ``.mdlive.yml`` in *search_path* and ancestors."""
    p = Path(search_path)
    candidates = [p / CONFIG_FILENAME]
    for parent in p.parents:
        candidates.append(parent / CONFIG_FILENAME)
        if (parent / ".git").exists():
            break
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def _load_yaml(path: Path) -> dict | None:
    """Load a YAML file, returning *None* on missing/invalid files."""
    path = path.expanduser()
    if not path.is_file():
        return None
    try:
        raw = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as exc:
        logger.warning(f"ignoring unreadable config {path}: {exc}")
        return None
    return raw if isinstance(raw, dict) else None


def _merge_raw(project: dict | None, user: dict | None) -> dict:
    """Merge project and user raw dicts (project wins per key)."""
    base: dict = {}
    for source in (user, project):
        if not source:
            continue
        for key in ("theme", "editor"):
            section = source.get(key)
            if isinstance(section, dict):
                base.setdefault(key, {}).update(section)
    return base


def _raw_to_config(raw: dict | None, config_source: str | None = None) -> MdliveConfig:
    """Convert a raw YAML dict to an ``MdliveConfig``."""
    if not raw:
        return MdliveConfig(project_config_path=config_source)

    theme_raw = raw.get("theme", {})
    if not isinstance(theme_raw, dict):
        theme_raw = {}

    editor_raw = raw.get("editor", {})
    if not isinstance(editor_raw, dict):
        editor_raw = {}

    defaults = ThemeConfig()
    theme_cfg = ThemeConfig(
        primary=_as_color(theme_raw.get("primary"), defaults.primary),
        secondary=_as_color(theme_raw.get("secondary"), defaults.secondary),
        tertiary=_as_color(theme_raw.get("tertiary"), defaults.tertiary),
        title_large=_as_size(theme_raw.get("title_large"), defaults.title_large),
        title_medium=_as_size(theme_raw.get("title_medium"), defaults.title_medium),
        title_small=_as_size(theme_raw.get("title_small"), defaults.title_small),
    )
    editor_cfg = EditorConfig(
        list_continuation=bool(editor_raw.get("list_continuation", True)),
    )

    return MdliveConfig(
        theme=theme_cfg,
        editor=editor_cfg,
        project_config_path=config_source,
    )


def _as_color(val: object, default: str) -> str:
    """Accept ``#rrggbb`` strings; anything else falls back to *default*."""
    if isinstance(val, str) and _HEX_COLOR.fullmatch(val.strip()):
        return val.strip().lower()
    return default


def _as_size(val: object, default: float) -> float:
    if isinstance(val, bool) or not isinstance(val, (int, float)) or val <= 0:
        return default
    return float(val)
