"""Errors raised before an evaluation starts."""

from typing import Optional


class ConfigurationError(ValueError):
    """Malformed rule set or snapshot input.

    Distinct from a validation failure, which is a normal report with
    overall_pass=False.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field
