import logging
import os
from logging.handlers import RotatingFileHandler


def init_logging(app):
    level_name = (app.config.get("LOG_LEVEL") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    handlers = [logging.StreamHandler()]

    log_dir = app.config.get("LOG_DIR")
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                os.path.join(log_dir, "choukwa.log"),
                maxBytes=5_000_000,
                backupCount=5,
                encoding="utf-8",
            )
        )

    # Service modules log under the package logger
    logger = logging.getLogger("choukwa")
    logger.setLevel(level)
    logger.handlers = []
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.propagate = False

    app.logger.handlers = logger.handlers
    app.logger.setLevel(level)
    return logger
