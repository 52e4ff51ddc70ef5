from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List

from .cursors import CursorFile, generate_cursor_files
from .errors import IconMissingError
from .icons import IconResult, collect_icon_results

if TYPE_CHECKING:
    from .config import Config


logger = logging.getLogger(__name__)

ICONS_DATA_FILE = "icons.json"
METADATA_DATA_FILE = "metadata.json"


@dataclass
class BuildReport:
    cursor_files: List[CursorFile] = field(default_factory=list)
    icons: Dict[str, IconResult] = field(default_factory=dict)
    data_files: List[Path] = field(default_factory=list)

    @property
    def failures(self) -> List[str]:
        """Source icon names that came back empty, cursors first."""
        missing = [c.source for c in self.cursor_files if not c.result.ok]
        missing.extend(r.name for r in self.icons.values() if not r.ok)
        return missing


def _write_json(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    logger.info("Wrote %s", path)
    return path


def run_build(config: "Config", *, strict: bool = False) -> BuildReport:
    """Produce every derived asset once.

    Cursor files are always written. With ``strict`` a missing icon raises
    IconMissingError before the data files are written; otherwise the
    failures are only logged and listed on the report.
    """
    report = BuildReport()
    report.cursor_files = generate_cursor_files(config)
    report.icons = collect_icon_results(config)

    failures = report.failures
    if failures:
        if strict:
            raise IconMissingError(failures)
        logger.warning("Build continues with %d blank icon(s): %s", len(failures), ", ".join(failures))

    if config.data_dir is not None:
        config.data_dir.mkdir(parents=True, exist_ok=True)
        bundle = {key: result.markup for key, result in report.icons.items()}
        report.data_files.append(_write_json(config.data_dir / ICONS_DATA_FILE, bundle))
        report.data_files.append(_write_json(config.data_dir / METADATA_DATA_FILE, config.metadata.to_dict()))

    return report
