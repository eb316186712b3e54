from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class ReportSink(Protocol):
    def upload(self, report: dict, folder: str, filename: str) -> str:
        """Store the finished report; returns the artifact id."""

        raise NotImplementedError


class LocalFolderReportSink(ReportSink):
    """Writes report artifacts as JSON files under ``<root>/<folder>/``."""

    def __init__(self, root: str | Path):
        self._root = Path(root)

    def upload(self, report: dict, folder: str, filename: str) -> str:
        out_dir = self._root / folder
        out_dir.mkdir(parents=True, exist_ok=True)
        out_file = out_dir / filename
        with out_file.open("w", encoding="utf-8") as f:
            json.dump(report, f, ensure_ascii=False)
        artifact_id = uuid.uuid4().hex
        logger.info("Report written to %s (id=%s)", out_file, artifact_id)
        return artifact_id
