from __future__ import annotations

import sys
from pathlib import Path

from core.config_service import ConfigService
from core.logger import setup_logger
from exchanges.clevercoin import CleverApiError, CleverCoinService


def run(config_path: Path = Path("config/config.yaml")) -> int:
    config_service = ConfigService(default_path=config_path)
    if config_path.exists():
        config_service.load()
    cfg = config_service.config
    logger = setup_logger(Path(cfg.app.log_path), level=cfg.app.log_level)

    with config_service.build_client(logger=logger) as client:
        service = CleverCoinService(client, logger=logger)
        logger.info("Using %s", client.describe())
        try:
            ticker = service.get_ticker()
            logger.info("Ticker: last=%s bid=%s ask=%s volume=%s", ticker.last, ticker.bid, ticker.ask, ticker.volume)
            book = service.get_order_book(group=True)
            logger.info("Order book: best bid %s, best ask %s", book.best_bid(), book.best_ask())
            if config_service.has_required_keys():
                logger.info("Bitcoin deposit address: %s", service.get_bitcoin_deposit_address())
        except CleverApiError as exc:
            logger.error("CleverCoin call failed (%s): %s", exc.kind, exc)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(run(Path(sys.argv[1]) if len(sys.argv) > 1 else Path("config/config.yaml")))
