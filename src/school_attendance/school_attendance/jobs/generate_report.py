"""Report job entry point.

Usage::

    python -m src.school_attendance.school_attendance.jobs.generate_report '{"report_key": "...", ...}'

Exit code 0 when the report is AVAILABLE, 1 otherwise.
"""

from __future__ import annotations

import importlib
import logging
import sys
from typing import Callable, Optional, Sequence

from dotenv import load_dotenv

from config import get_settings_module

from ..common.logging_utils import configure_logging
from ..container import Container, build_container_from_settings
from ..core.exceptions import ValidationError
from ..reports.params import parse_report_payload, recover_report_key

logger = logging.getLogger(__name__)

USAGE = 'Usage: generate_report \'{"report_key": "R1", "report_type": "BY_DAY", ...}\''


def _load_settings():
    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    container_factory: Optional[Callable[[], Container]] = None,
) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    settings = None
    if container_factory is None:
        settings = _load_settings()
        configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if len(argv) < 1:
        logger.error("The report payload is required as a JSON argument. %s", USAGE)
        return 1

    container = container_factory() if container_factory else build_container_from_settings(settings)
    try:
        raw = argv[0]
        try:
            payload = parse_report_payload(raw)
        except ValidationError as e:
            logger.error("Invalid report payload: %s", e)
            report_key = recover_report_key(raw)
            if report_key:
                container.report_job_service.mark_failed(report_key)
            return 1

        logger.info("Generating report %s (%s)", payload.report_key, payload.granularity.value)
        try:
            result = container.report_job_service.run(payload)
        except Exception:
            logger.exception("Report %s failed", payload.report_key)
            return 1

        logger.info("Report %s uploaded as %s", result.report_key, result.filename)
        return 0
    finally:
        container.close()


if __name__ == "__main__":
    sys.exit(main())
