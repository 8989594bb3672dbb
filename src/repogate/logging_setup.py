"""Console logging for repogate, rendered through Rich."""

import logging

from rich.console import Console
from rich.logging import RichHandler

_NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str | int = "INFO", logger_name: str = "repogate") -> logging.Logger:
    """Configure the ``repogate`` logger tree.

    Safe to call more than once: existing handlers are replaced, not stacked.
    uvicorn keeps its own handlers.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.propagate = False

    for hdlr in logger.handlers[:]:
        logger.removeHandler(hdlr)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        tracebacks_max_frames=3,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)

    # Request lines from the upstream client would log every proxied call.
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
