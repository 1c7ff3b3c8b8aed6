"""
Exceptions raised while building an LTI Tool Provider configuration.

Every failure carries a fixed ``kind`` tag so callers can tell configuration
problems apart without matching on message text. Only the Tool Provider kind
exists today; new kinds are added to ``ErrorKind``.

Copyright (c) 2025 Mohammad Atashi <mohammadaliatashi@icloud.com>
"""

import datetime
from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(Enum):
    """Tags identifying the origin of a configuration error."""
    TOOL_PROVIDER = 1


class ConfigurationError(Exception):
    """Configuration error with structured context about the offending input."""

    def __init__(self, message: str,
                 kind: ErrorKind = ErrorKind.TOOL_PROVIDER,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.context = context or {}
        self.timestamp = datetime.datetime.now(datetime.timezone.utc)

    def __str__(self) -> str:
        message = super().__str__()
        if self.context:
            details = ", ".join(f"{key}={value!r}" for key, value in self.context.items())
            message += f" ({details})"
        return message
