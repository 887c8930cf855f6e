from __future__ import annotations

import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from smscatalog.app import sync_catalog
from smscatalog.config import ConfigurationError, configure_logging
from smscatalog.domain.ports import StoreConnectionError

if TYPE_CHECKING:
    from types import FrameType

log = logging.getLogger(__name__)


def main() -> None:
    """Batch entry point: run one catalog sync and exit.

    Exits 1 only when configuration is unusable or the catalog store cannot be
    reached; every other outcome, published or not, exits 0 and waits for the
    next scheduled invocation.
    """
    configure_logging()
    try:
        report = sync_catalog()
    except (StoreConnectionError, ConfigurationError):
        log.exception("Catalog sync could not start")
        sys.exit(1)

    if not report.published:
        log.warning("Catalog was not published; the previous catalog stays live")


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.warning("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
