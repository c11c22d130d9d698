#!/usr/bin/env python3
"""
Run the scheduled auto-checkout once.

Meant for cron (or any scheduler) every few minutes around closing time:

    */5 * * * * cd /srv/volunteerhub && python scripts/auto_checkout.py

It exits 0 whether or not it was time to check anyone out, and 1 if any
volunteer could not be checked out.
"""
import sys

from volunteerhub.core.config import settings
from volunteerhub.core.logging_config import get_logger, setup_logging
from volunteerhub.db import get_db_context
from volunteerhub.services.auto_checkout import run_scheduled_auto_checkout


def main() -> int:
    setup_logging(level=settings.LOG_LEVEL, json_logs=settings.ENVIRONMENT == "production")
    logger = get_logger("auto_checkout")

    with get_db_context() as db:
        result = run_scheduled_auto_checkout(db)

    logger.info(
        "auto_checkout_run",
        ran=result.ran,
        message=result.message,
        checked_out=result.count,
        failed=len(result.failed_user_ids),
    )
    return 1 if result.failed_user_ids else 0


if __name__ == "__main__":
    sys.exit(main())
