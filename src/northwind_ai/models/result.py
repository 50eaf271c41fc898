"""
AI Call Result

The single result shape returned by every AI-backed operation.
"""

from dataclasses import dataclass


@dataclass
class AICallResult:
    """
    Outcome of an AI-backed operation.

    On success `message` holds the generated text (plain or HTML).
    On failure it holds a human-readable diagnostic.
    """
    success: bool
    message: str = ""

    @classmethod
    def ok(cls, message: str) -> "AICallResult":
        return cls(success=True, message=message)

    @classmethod
    def fail(cls, message: str) -> "AICallResult":
        return cls(success=False, message=message)

    def to_dict(self) -> dict:
        return {"success": self.success, "message": self.message}
