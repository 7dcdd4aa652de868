import logging
import sys

BRIEF_FORMAT = "[odesim] %(levelname)s %(name)s: %(message)s"
DEBUG_FORMAT = "%(asctime)s [%(levelname)-5.5s] [%(name)s:%(lineno)d] %(message)s"


def setup_logging(level=logging.WARNING, stream=None):
    """Route odesim logging to stderr; stdout is reserved for result JSON.

    Debug runs get timestamps and line numbers, anything quieter gets the
    short ``[odesim]`` prefix used by the CLI's progress lines.
    """
    fmt = DEBUG_FORMAT if level <= logging.DEBUG else BRIEF_FORMAT
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setFormatter(logging.Formatter(fmt))
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    # Third-party clients are chatty at DEBUG.
    for noisy in ("anthropic", "httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(max(level, logging.INFO))
    logging.getLogger(__name__).debug("Logging configured at %s", logging.getLevelName(level))
