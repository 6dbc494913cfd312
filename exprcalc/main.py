from __future__ import annotations

import logging
import sys

from exprcalc.infra.config import load_settings
from exprcalc.infra.logging_config import configure_logging
from exprcalc.shell import run_shell

LOGGER = logging.getLogger(__name__)


def main() -> int:
    settings = load_settings()
    configure_logging(level=settings.log_level, log_file=settings.log_file)
    LOGGER.info(
        "startup max_expression_length=%s log_file=%s",
        settings.max_expression_length,
        settings.log_file,
    )
    run_shell(settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
