"""Logging setup for Voidspinner."""

import logging
import os
from logging.handlers import RotatingFileHandler

from src.api.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Configures and returns a general-purpose logger.
    Logs to console and, when LOG_DIR is set, a rotating file (voidspinner.log).
    """
    logger = logging.getLogger(name)
    logger.setLevel(settings.LOG_LEVEL)

    # Handlers are attached once per logger name
    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)

        if settings.LOG_DIR:
            os.makedirs(settings.LOG_DIR, exist_ok=True)
            file_handler = RotatingFileHandler(
                os.path.join(settings.LOG_DIR, "voidspinner.log"),
                maxBytes=1024 * 1024 * 5,  # 5 MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(file_handler)

    return logger


def get_transaction_logger() -> logging.Logger:
    """
    Configures and returns the audit logger for flux-moving events.
    Writes only to transactions.log; never propagates to the console.
    """
    tx_logger = logging.getLogger("transaction_audit")
    tx_logger.setLevel(logging.INFO)
    tx_logger.propagate = False

    if settings.LOG_DIR and not any(
        isinstance(h, RotatingFileHandler) and "transactions.log" in h.baseFilename
        for h in tx_logger.handlers
    ):
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        tx_file_handler = RotatingFileHandler(
            os.path.join(settings.LOG_DIR, "transactions.log"),
            maxBytes=1024 * 1024 * 10,  # 10 MB
            backupCount=10,
            encoding="utf-8",
        )
        tx_file_handler.setFormatter(logging.Formatter("%(asctime)s | %(message)s"))
        tx_logger.addHandler(tx_file_handler)

    return tx_logger
