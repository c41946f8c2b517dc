import logging
import sys
from datetime import datetime
from pathlib import Path

from coindash_bot.config import Config

PACKAGE_LOGGER = 'coindash_bot'

def setup_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """
    Attach console and daily file handlers to a logger.

    Called once for the package logger at startup; modules log through
    `logging.getLogger(__name__)` and propagate to it.
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    log_level = logging.DEBUG if Config.DEBUG else logging.INFO
    logger.setLevel(log_level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_dir = Path(Config.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(
        log_dir / f'coindash_bot_{datetime.now().strftime("%Y%m%d")}.log',
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # discord.py logs every gateway event at DEBUG
    logging.getLogger('discord').setLevel(logging.INFO)

    return logger
