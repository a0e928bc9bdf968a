# semrange/errors.py
from __future__ import annotations

__all__ = ["FormatError", "InvariantViolation"]



class FormatError(ValueError):
    """Raised when version or range text does not follow the grammar."""
    def __init__(self, message: str, *, text: str | None = None, offset: int | None = None):
        self.message = message
        self.text = text
        self.offset = offset
        super().__init__(self._render())

    def _render(self) -> str:
        if self.text is None:
            return self.message
        if self.offset is None:
            return f"{self.message} in {self.text!r}"
        return f"{self.message} in {self.text!r} at char {self.offset}"



class InvariantViolation(RuntimeError):
    """Raised when the range reducer ends up in a state no accepted input can produce."""
    pass
