"""SVG icon loading.

Icons are read from a third-party icon package (Tabler outline icons by
default), parsed as an XML tree and rewritten by attribute key:

- every ``class`` attribute is dropped,
- the root ``width``/``height`` are set to the requested pixel size,
- inline icons get our class marker and ``aria-hidden="true"``,
- cursor icons are recoloured to a white stroke on a black fill.

A missing or unreadable icon never raises. It is logged and yields an
``IconResult`` with empty markup, so callers decide whether that is fatal.
"""

from __future__ import annotations

import enum
import logging
import math
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional, Union

from .config import DEFAULT_CURSOR_SIZE, DEFAULT_ICONS_DIR, DEFAULT_INLINE_CLASS, DEFAULT_INLINE_SIZE

if TYPE_CHECKING:
    from .config import Config


logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
SVG_PREFIX = f"{{{SVG_NS}}}"

CURSOR_STROKE = "white"
CURSOR_FILL = "black"
CURSOR_STROKE_WIDTH = "1"


class IconVariant(str, enum.Enum):
    INLINE = "inline"
    CURSOR = "cursor"


class IconStatus(str, enum.Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    UNREADABLE = "unreadable"


@dataclass(frozen=True)
class IconRequest:
    name: str
    size: int

    def __post_init__(self) -> None:
        if isinstance(self.size, bool) or not isinstance(self.size, int) or self.size <= 0:
            raise ValueError(f"icon size must be a positive integer, got {self.size!r}")


@dataclass(frozen=True)
class IconResult:
    name: str
    status: IconStatus
    markup: str = ""
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status is IconStatus.OK


def icon_path(name: str, icons_dir: Union[str, Path] = DEFAULT_ICONS_DIR) -> Path:
    return Path(icons_dir) / f"{name}.svg"


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _parse_length(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    v = value.strip()
    if v.endswith("px"):
        v = v[:-2]
    try:
        n = float(v)
    except ValueError:
        return None
    # float() accepts "nan", "inf" and overflowing literals
    if not math.isfinite(n) or n <= 0:
        return None
    return n


def _fmt(n: float) -> str:
    return str(int(n)) if n == int(n) else str(n)


def _serialise(root: ET.Element) -> str:
    """Serialise with SVG as the unprefixed default namespace.

    SVG tags are made unqualified and the root carries a plain ``xmlns``, so
    the output reads <svg xmlns="..."><path/> rather than ns0:svg, without
    touching ElementTree's process-wide prefix registry.
    """
    if not root.tag.startswith(SVG_PREFIX):
        return ET.tostring(root, encoding="unicode")
    for el in root.iter():
        if isinstance(el.tag, str) and el.tag.startswith(SVG_PREFIX):
            el.tag = el.tag[len(SVG_PREFIX):]
    attrib = {"xmlns": SVG_NS, **root.attrib}
    root.attrib.clear()
    root.attrib.update(attrib)
    return ET.tostring(root, encoding="unicode")


def _rewrite(root: ET.Element, request: IconRequest, variant: IconVariant, inline_class: str) -> None:
    for el in root.iter():
        el.attrib.pop("class", None)

    if "viewBox" not in root.attrib:
        # viewBox from the native size, taken before width/height are overwritten
        w = _parse_length(root.get("width"))
        h = _parse_length(root.get("height"))
        if w and h:
            root.set("viewBox", f"0 0 {_fmt(w)} {_fmt(h)}")

    root.set("width", str(request.size))
    root.set("height", str(request.size))

    if variant is IconVariant.INLINE:
        root.set("class", inline_class)
        root.set("aria-hidden", "true")
    else:
        root.set("stroke", CURSOR_STROKE)
        root.set("fill", CURSOR_FILL)
        root.set("stroke-width", CURSOR_STROKE_WIDTH)


def load_icon(
    name: str,
    size: int = DEFAULT_INLINE_SIZE,
    *,
    icons_dir: Union[str, Path] = DEFAULT_ICONS_DIR,
    variant: Union[IconVariant, str] = IconVariant.INLINE,
    inline_class: str = DEFAULT_INLINE_CLASS,
) -> IconResult:
    """Load one icon and return a typed result.

    Raises ValueError only for a malformed size (size <= 0). An empty name
    matches no asset and is reported as NOT_FOUND.
    Read and parse failures are logged and reported through ``status``.
    """
    request = IconRequest(name, size)
    variant = IconVariant(variant)
    label = "Cursor icon" if variant is IconVariant.CURSOR else "Icon"
    if not name.strip():
        e = FileNotFoundError("empty icon name")
        logger.error("%s %r not found: %s", label, name, e)
        return IconResult(name, IconStatus.NOT_FOUND, error=e)
    path = icon_path(name, icons_dir)

    try:
        data = path.read_bytes()
    except FileNotFoundError as e:
        logger.error("%s %s not found: %s", label, name, e)
        return IconResult(name, IconStatus.NOT_FOUND, error=e)
    except OSError as e:
        logger.error("%s %s could not be read: %s", label, name, e)
        return IconResult(name, IconStatus.UNREADABLE, error=e)

    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        logger.error("%s %s is not valid SVG: %s", label, name, e)
        return IconResult(name, IconStatus.UNREADABLE, error=e)

    if _local_name(root.tag) != "svg":
        e = ValueError(f"{path}: root element is <{_local_name(root.tag)}>, not <svg>")
        logger.error("%s %s is not valid SVG: %s", label, name, e)
        return IconResult(name, IconStatus.UNREADABLE, error=e)

    _rewrite(root, request, variant, inline_class)
    markup = _serialise(root)
    logger.info("Loaded %s icon %s at %dpx from %s", variant.value, name, size, path)
    return IconResult(name, IconStatus.OK, markup=markup)


def get_icon(
    name: str,
    size: int = DEFAULT_INLINE_SIZE,
    *,
    icons_dir: Union[str, Path] = DEFAULT_ICONS_DIR,
    inline_class: str = DEFAULT_INLINE_CLASS,
) -> str:
    """Inline icon markup, or "" if the icon is missing."""
    return load_icon(name, size, icons_dir=icons_dir, inline_class=inline_class).markup


def get_cursor_icon(
    name: str,
    size: int = DEFAULT_CURSOR_SIZE,
    *,
    icons_dir: Union[str, Path] = DEFAULT_ICONS_DIR,
) -> str:
    """Cursor icon markup, or "" if the icon is missing."""
    return load_icon(name, size, icons_dir=icons_dir, variant=IconVariant.CURSOR).markup


def collect_icon_results(config: "Config") -> Dict[str, IconResult]:
    return {
        key: load_icon(
            source,
            config.inline_size,
            icons_dir=config.icons_dir,
            inline_class=config.inline_class,
        )
        for key, source in config.inline_icons.items()
    }


def build_icon_bundle(config: "Config") -> Dict[str, str]:
    """The exported key -> inline markup mapping (externalLink, linkedin, ...)."""
    return {key: result.markup for key, result in collect_icon_results(config).items()}
