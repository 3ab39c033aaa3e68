import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """Install a single console handler on the root logger."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Avoid duplicate handlers when the app factory runs more than once
    if any(getattr(h, "_bubo", False) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._bubo = True
    root.addHandler(handler)
