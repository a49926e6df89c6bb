#!/usr/bin/env python3
"""Demo runner for subject ledgers and threshold-guarded debits.

Usage:
    uv run python scripts/demo_run.py

Set ETERNALCURRENCIES_REGISTRY_PATH to load currency definitions and
ETERNALCURRENCIES_DATA_DIR to choose where ledgers are saved.
"""

import logging
import sys

from eternalcurrencies import build_api
from eternalcurrencies.settings import get_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

transaction_logger = logging.getLogger("eternalcurrencies.transactions")
transaction_logger.setLevel(logging.INFO)

logger = logging.getLogger(__name__)

COIN = "eternalcurrencies:coin"


def main() -> int:
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level)
    api = build_api(settings)

    for currency, data in api.registered_currencies().items():
        logger.info("Registered %s (%s, %d decimals)", currency, data.display_name, data.decimal_places)

    api.attachments.load_from(settings.data_dir)
    api.attachments.attach("steve")

    api.set_balance_for("steve", COIN, 100)
    steps = [(30, 0), (80, 0), (70, -50), (10, -50), (45, -50)]
    for amount, threshold in steps:
        ok = api.take_balance_with_threshold("steve", COIN, amount, threshold)
        logger.info(
            "take %d (threshold %d) -> %s, balance %d",
            amount,
            threshold,
            ok,
            api.balance_for("steve", COIN),
        )

    logger.info("Unattached subject reads %d", api.balance_for("nobody", COIN))
    api.attachments.save_to(settings.data_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
