import logging
import os
from typing import Optional

ROOT_LOGGER_NAME = "BETTERFEEDS"

def get_logger(component: Optional[str] = None) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)

    log_level_from_env = os.getenv("BETTERFEEDS_LOG_LEVEL", os.getenv("LOG_LEVEL", "INFO")).upper()
    root.setLevel(getattr(logging, log_level_from_env, logging.INFO))

    if not root.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # Component loggers share the root handler through propagation
    return root.getChild(component) if component else root
