from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Union

from .config import DEFAULT_CURSORS
from .icons import IconResult, IconVariant, load_icon

if TYPE_CHECKING:
    from .config import Config


__all__ = ["DEFAULT_CURSORS", "CursorFile", "generate_cursor_files"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CursorFile:
    name: str
    source: str
    path: Path
    result: IconResult

    @property
    def size_bytes(self) -> int:
        return len(self.result.markup.encode("utf-8"))


def generate_cursor_files(config: "Config", output_dir: Optional[Union[str, Path]] = None) -> List[CursorFile]:
    """Write one ``<name>.svg`` per configured cursor into the output directory.

    The directory is created (with parents) if absent and existing files are
    overwritten, so running this twice leaves the same tree. A missing source
    icon still produces a file, just an empty one; inspect ``result`` or the
    log to tell the two apart. Write errors propagate.
    """
    out = Path(output_dir) if output_dir is not None else config.output_dir
    out.mkdir(parents=True, exist_ok=True)

    written: List[CursorFile] = []
    for name, source in config.cursors.items():
        result = load_icon(source, config.cursor_size, icons_dir=config.icons_dir, variant=IconVariant.CURSOR)
        path = out / f"{name}.svg"
        path.write_text(result.markup, encoding="utf-8")
        logger.info("Wrote cursor %s (%s) to %s", name, result.status.value, path)
        written.append(CursorFile(name=name, source=source, path=path, result=result))
    return written
