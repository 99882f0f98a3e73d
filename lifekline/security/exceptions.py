"""
Exception hierarchy for lifekline.

Every error raised by the pipeline carries a bounded prefix of the raw model
output so prompt or schema drift can be diagnosed without re-querying the model.
"""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from ..core.error_handling import AttemptRecord
    from ..schema.validator import DebugSnapshot


class LifeKlineError(Exception):
    """Base class for all lifekline errors."""

    category = "unknown"

    def __init__(self, message: str, raw_prefix: str = ""):
        self.message = message
        self.raw_prefix = raw_prefix
        super().__init__(self._format())

    def _format(self) -> str:
        return f"[{self.category}] {self.message}"


class SecurityError(LifeKlineError):
    """Raised when input exceeds configured limits."""

    category = "security"


class ParseError(LifeKlineError):
    """Raised when no strategy recovers a JSON value from the model output."""

    category = "parse"

    def __init__(
        self,
        message: str,
        raw_prefix: str = "",
        attempts: Optional[list["AttemptRecord"]] = None,
    ):
        self.attempts = list(attempts or [])
        super().__init__(message, raw_prefix)

    def _format(self) -> str:
        lines = [f"[{self.category}] {self.message}"]
        if self.attempts:
            lines.append("Attempts:")
            lines.extend(f"  - {attempt.describe()}" for attempt in self.attempts)
        lines.append(f"Raw output (first {len(self.raw_prefix)} chars):")
        lines.append(self.raw_prefix)
        return "\n".join(lines)


class ExtractionError(ParseError):
    """No candidate JSON-like span was found in the model output."""

    category = "extraction"


class JSONSyntaxError(ParseError):
    """A candidate span was found but failed strict parsing after all repairs."""

    category = "syntax"


class SchemaError(LifeKlineError):
    """Parsing succeeded but the normalized value is missing required structure."""

    category = "schema"

    def __init__(
        self,
        message: str,
        snapshot: "DebugSnapshot",
        reasons: Optional[list[str]] = None,
    ):
        self.snapshot = snapshot
        self.reasons = list(reasons or [])
        super().__init__(message, snapshot.raw_prefix)

    def _format(self) -> str:
        lines = [f"[{self.category}] {self.message}"]
        lines.extend(f"  - {reason}" for reason in self.reasons)
        lines.append(self.snapshot.render())
        return "\n".join(lines)


class UpstreamError(LifeKlineError):
    """The chat-completion collaborator failed or returned no content."""

    category = "upstream"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
    ):
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    def _format(self) -> str:
        if self.status_code is None:
            return f"[{self.category}] {self.message}"
        return f"[{self.category}] {self.message} (status {self.status_code})"
