# docsign_core/logger.py

"""
docsign_core.logger
-------------------
Structured JSON logging for every docsign component.

Handlers live on the shared "DocSign" parent logger only; module loggers
("DocSign.KeyStore", "DocSign.Crypto", ...) carry no handlers or level of
their own and propagate to it, so one `configure_logging` call controls the
whole package.
"""

import logging, json, sys, time, os

ROOT_LOGGER = "DocSign"

_FORMATTER = logging.Formatter(
    fmt=json.dumps({
        "ts": "%(asctime)s",
        "level": "%(levelname)s",
        "name": "%(name)s",
        "msg": "%(message)s"
    }),
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
_FORMATTER.converter = time.gmtime  # Use UTC timestamps


def resolve_level(level):
    """Map a level name or number to a logging level; unknown names yield (INFO, name)."""
    if isinstance(level, int):
        return level, None
    name = str(level).strip().upper()
    value = logging.getLevelName(name)
    if isinstance(value, int):
        return value, None
    return logging.INFO, name


def configure_logging(level=None, to_file=None):
    """Set level and handlers on the DocSign parent logger.

    Falls back to DOCSIGN_LOG_LEVEL / DOCSIGN_LOG_FILE. Safe to call more than
    once: the stdout handler is added once, each file target at most once.
    """
    root = logging.getLogger(ROOT_LOGGER)
    resolved, unknown = resolve_level(level if level is not None else os.getenv("DOCSIGN_LOG_LEVEL", "INFO"))
    root.setLevel(resolved)

    if not any(type(h) is logging.StreamHandler for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(_FORMATTER)
        root.addHandler(handler)

    to_file = to_file or os.getenv("DOCSIGN_LOG_FILE")
    if to_file:
        target = os.path.abspath(to_file)
        if not any(isinstance(h, logging.FileHandler) and h.baseFilename == target for h in root.handlers):
            # Ensure the directory exists before writing
            os.makedirs(os.path.dirname(target), exist_ok=True)
            file_handler = logging.FileHandler(target)
            file_handler.setFormatter(_FORMATTER)
            root.addHandler(file_handler)

    if unknown:
        root.warning(f"[LOGGING] unknown log level '{unknown}', using INFO")
    return root


def get_logger(name=ROOT_LOGGER):
    """Module logger under the DocSign parent; configures the parent on first use."""
    if not logging.getLogger(ROOT_LOGGER).handlers:
        configure_logging()
    return logging.getLogger(name)
