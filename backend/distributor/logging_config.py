import logging
import os

from distributor.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging() -> None:
    """
    Configure the root logger once: console always, file when LOG_FILE is set.
    """
    root = logging.getLogger()
    if getattr(root, "_distributor_configured", False):
        return

    root.setLevel(settings.LOG_LEVEL.upper())
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if settings.LOG_FILE:
        log_dir = os.path.dirname(settings.LOG_FILE)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(settings.LOG_FILE, mode="a")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root._distributor_configured = True
