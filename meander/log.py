import json
import logging
import os

DEFAULT_FORMAT = "%(levelname)s: %(message)s"

# Fields passed through `extra=` that end up in JSON log lines.
EXTRA_FIELDS = ("threshold", "segments", "polylines", "triangles", "path")


class JsonFormatter(logging.Formatter):
    """Format log records as one JSON object per line."""

    def format(self, record):
        entry = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                entry[key] = getattr(record, key)
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(level=None, json_format: bool = False) -> None:
    """
    Configure the root logger once for command-line use.

    level defaults to $MEANDER_LOG_LEVEL, then INFO.
    """
    level = (level or os.environ.get("MEANDER_LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=level, format=DEFAULT_FORMAT, force=True)
    if json_format:
        for handler in logging.getLogger().handlers:
            handler.setFormatter(JsonFormatter())


def get_logger(name):
    return logging.getLogger(name)
