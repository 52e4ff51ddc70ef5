from __future__ import annotations

from pathlib import Path

import pytest


# Same layout as @tabler/icons outline files: tag header comment, multi-line
# root tag carrying the default 24px size and a class list.
TABLER_TEMPLATE = """<!--
tags: [{name}]
category: Test
-->
<svg
  xmlns="http://www.w3.org/2000/svg"
  width="24"
  height="24"
  viewBox="0 0 24 24"
  fill="none"
  stroke="currentColor"
  stroke-width="2"
  stroke-linecap="round"
  stroke-linejoin="round"
  class="icon icon-tabler icons-tabler-outline icon-tabler-{name}"
>
  <path stroke="none" d="M0 0h24v24H0z" fill="none"/>
  <path d="M12 3a9 9 0 1 0 0 18a9 9 0 0 0 0 -18" class="stroke-part" />
</svg>
"""

TABLER_ICONS = [
    "external-link",
    "brand-linkedin",
    "brand-instagram",
    "circle-arrow-left",
    "circle-arrow-right",
]


def _write_icon(icons_dir: Path, name: str, content: str | None = None) -> Path:
    path = icons_dir / f"{name}.svg"
    path.write_text(content if content is not None else TABLER_TEMPLATE.format(name=name), encoding="utf-8")
    return path


@pytest.fixture
def write_icon():
    """Write an icon file; Tabler-style markup unless content is given."""
    return _write_icon


@pytest.fixture
def icons_dir(tmp_path: Path) -> Path:
    d = tmp_path / "node_modules" / "@tabler" / "icons" / "icons" / "outline"
    d.mkdir(parents=True)
    for name in TABLER_ICONS:
        _write_icon(d, name)
    return d


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's own sitectl.yaml out of the tests."""
    monkeypatch.delenv("SITECTL_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-home"))
    monkeypatch.setenv("XDG_CONFIG_DIRS", str(tmp_path / "xdg-dirs"))
    monkeypatch.chdir(tmp_path)
