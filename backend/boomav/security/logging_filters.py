"""Logging filters that scrub sensitive content."""

from __future__ import annotations

import logging
import re

_SENSITIVE_PATTERN = re.compile(
    r"(Authorization: Bearer\s+[\w\.-]+"
    r"|Stripe-Signature:\s*\S+"
    r"|t=\d+,v1=[0-9a-f]+"
    r"|(?:smtp_)?password[\"']?\s*[:=]\s*[\"']?[^\s\"',]+)",
    re.IGNORECASE,
)


class SensitiveFilter(logging.Filter):
    """Replace sensitive tokens in log messages with a redaction marker."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = _SENSITIVE_PATTERN.sub("**REDACTED**", record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                _SENSITIVE_PATTERN.sub("**REDACTED**", arg) if isinstance(arg, str) else arg
                for arg in record.args
            )
        return True


__all__ = ["SensitiveFilter"]
