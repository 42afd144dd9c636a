"""
Logging redaction helpers.
Redacts API keys and tokens from log messages.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable


_PATTERNS: Iterable[tuple[re.Pattern, str]] = (
    # Finnhub token / Gemini key in query strings
    (re.compile(r"(?i)([?&](?:token|key)=)([^&\s]+)"), r"\1[REDACTED]"),
    # Authorization: Bearer <token>
    (re.compile(r"(Bearer\s+)([A-Za-z0-9\-\._]+)"), r"\1[REDACTED]"),
    # Finnhub / Gemini keys echoed from config
    (re.compile(r"(?i)((?:finnhub|gemini)_api_key)\s*[:=]\s*([A-Za-z0-9\-\._]+)"), r"\1=[REDACTED]"),
    # Generic api key/secret pairs
    (re.compile(r"(?i)(api[_-]?key|api[_-]?secret)\s*[:=]\s*([A-Za-z0-9\-\._]+)"), r"\1=[REDACTED]"),
)


def redact_message(message: str) -> str:
    redacted = message
    for pattern, replacement in _PATTERNS:
        redacted = pattern.sub(replacement, redacted)
    return redacted


class RedactingFilter(logging.Filter):
    """Filter that redacts sensitive data from log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Malformed format args; leave the record for the handler to report
            return True
        record.msg = redact_message(message)
        record.args = ()
        return True


def install_redaction_filter() -> None:
    """Attach the redacting filter to every root handler (once)."""
    root = logging.getLogger()
    targets = [root, *root.handlers]
    for target in targets:
        if any(isinstance(f, RedactingFilter) for f in target.filters):
            continue
        target.addFilter(RedactingFilter())
