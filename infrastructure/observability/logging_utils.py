"""Structured, secret-safe logging for a CLI run.

Events are logged as ``event=<name> key="value" ...`` lines. Every line that
reaches a handler installed by :func:`configure_logging` is tagged with the
run id and scrubbed of registered secrets and well-known token shapes, so a
raw ``logger.warning(...)`` with an exception message is as safe as
:func:`log_event`.
"""

import logging
import re
import sys
from typing import IO, Any

from infrastructure.observability.context import get_run_id


_LOG_FORMAT = "%(asctime)s %(levelname)s [run_id=%(run_id)s] %(name)s - %(message)s"
_REDACTED = "[REDACTED]"
# Shorter values would mask ordinary words in diffs and commit subjects.
_MIN_SECRET_LENGTH = 6
_TOKEN_PATTERNS = (
    re.compile(r"(x-access-token:)[^@\s]+", re.IGNORECASE),
    re.compile(r"(Bearer\s+)[A-Za-z0-9_\-.]+", re.IGNORECASE),
    re.compile(r"\bgh[pousr]_[A-Za-z0-9_]+\b"),
    re.compile(r"\bgithub_pat_[A-Za-z0-9_]+\b"),
    re.compile(r"\bsk-ant-[A-Za-z0-9_\-]+\b"),
    re.compile(r"\bsk-[A-Za-z0-9_\-]{20,}\b"),
)


class SecretRedactor:
    def __init__(self, patterns: tuple[re.Pattern[str], ...] = _TOKEN_PATTERNS) -> None:
        self.patterns = patterns
        self._values: set[str] = set()

    def register(self, *values: str | None) -> None:
        for value in values:
            if value and len(value) >= _MIN_SECRET_LENGTH:
                self._values.add(value)

    def redact(self, text: str) -> str:
        # Longest first, so a secret that contains another one is masked whole.
        for value in sorted(self._values, key=len, reverse=True):
            text = text.replace(value, _REDACTED)
        for pattern in self.patterns:
            replacement = r"\1" + _REDACTED if pattern.groups else _REDACTED
            text = pattern.sub(replacement, text)
        return text


_redactor = SecretRedactor()


def register_sensitive_values(*values: str | None) -> None:
    _redactor.register(*values)


def redact_secrets(text: str) -> str:
    return _redactor.redact(text)


def safe_message(message: str) -> str:
    return redact_secrets(message)


class RunIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = get_run_id()
        return True


class RedactingFormatter(logging.Formatter):
    """Formats the record normally, then redacts the whole line (tracebacks included)."""

    def __init__(self, fmt: str = _LOG_FORMAT, redactor: SecretRedactor | None = None) -> None:
        super().__init__(fmt)
        self.redactor = redactor or _redactor

    def format(self, record: logging.LogRecord) -> str:
        return self.redactor.redact(super().format(record))


def build_log_handler(stream: IO[str] | None = None) -> logging.Handler:
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.addFilter(RunIdFilter())
    handler.setFormatter(RedactingFormatter())
    return handler


def configure_logging(level: str | int = logging.WARNING) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if not root_logger.handlers:
        root_logger.addHandler(build_log_handler())
        return

    # Handlers installed by someone else still get the run id and redaction.
    for handler in root_logger.handlers:
        if not any(isinstance(f, RunIdFilter) for f in handler.filters):
            handler.addFilter(RunIdFilter())
        if not isinstance(handler.formatter, RedactingFormatter):
            handler.setFormatter(RedactingFormatter())


def _format_field_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    text = value if isinstance(value, str) else repr(value)
    # One event per line: command output and API error bodies are often multi-line.
    return safe_message(text).replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\r", "\\r")


def structured_message(event: str, **fields: Any) -> str:
    parts = [f"event={safe_message(event)}"]
    parts.extend(f'{key}="{_format_field_value(value)}"' for key, value in fields.items() if value is not None)
    return " ".join(parts)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    if logger.isEnabledFor(level):
        logger.log(level, structured_message(event, **fields))
