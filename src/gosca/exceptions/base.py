"""Root of the gosca exception hierarchy."""

from typing import Dict, Optional


class GoscaError(Exception):
    """Any error gosca raises on purpose.

    ``details`` holds structured context (file, line, config key...) that is
    appended to the message when the error is printed.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, str] = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = "; ".join(f"{key}: {value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
