"""
Error types raised at the IRI boundary.
"""

from typing import Optional


class MalformedIri(ValueError):
    """
    Raised when a string cannot be turned into a normalized IRI.

    Attributes:
        reason: Human-readable description of the failure
        value: The offending substring (or the full input)
    """

    def __init__(self, reason: str, value: Optional[str] = None):
        self.reason = reason
        self.value = value
        if value is None:
            message = reason
        else:
            message = f"{reason}: {value!r}"
        super().__init__(message)
