import logging
import os
from logging.handlers import TimedRotatingFileHandler

# ──────────────────────────
# Log destinations
# ──────────────────────────
LOG_DIR = "_logs"
BASE_LOG_NAME = "stats_bot"    # _logs/stats_bot.log
LOG_LEVEL_CONSOLE = logging.INFO
LOG_LEVEL_FILE = logging.DEBUG
BACKUP_COUNT = 30              # days
# One file per day, old days keep a date suffix
ROTATE_WHEN = "midnight"
ROTATE_INTERVAL = 1

# Every module calls getLogger(LOGGER_NAME) so they all share these handlers.
LOGGER_NAME = "ServerStatsBot"

def get_logger():
    """Return a logger configured to log to console and a rotating file."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Already configured by an earlier import
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler()
    console_handler.setLevel(LOG_LEVEL_CONSOLE)
    console_handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(console_handler)

    try:
        os.makedirs(LOG_DIR, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            filename=os.path.join(LOG_DIR, f"{BASE_LOG_NAME}.log"),
            when=ROTATE_WHEN,
            interval=ROTATE_INTERVAL,
            backupCount=BACKUP_COUNT,
            encoding="utf-8"
        )
    except OSError as e:
        # Read-only working dir: console logging still works
        logger.warning(f"File logging disabled: {e}")
        return logger

    file_handler.setLevel(LOG_LEVEL_FILE)
    file_handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(file_handler)

    return logger
