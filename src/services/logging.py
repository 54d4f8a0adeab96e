import logging
import json
from typing import Iterable

# Third-party loggers that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "telegram")


class JsonFormatter(logging.Formatter):
    """One JSON object per line, suitable for container log collectors."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: int = logging.INFO, quiet: Iterable[str] = NOISY_LOGGERS) -> None:
    root = logging.getLogger()
    root.setLevel(level)

    for name in quiet:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    # Calling twice must not duplicate output
    if any(isinstance(h.formatter, JsonFormatter) for h in root.handlers):
        return

    stream = logging.StreamHandler()
    stream.setFormatter(JsonFormatter())
    root.addHandler(stream)
