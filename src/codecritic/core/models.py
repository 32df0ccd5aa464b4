"""Domain models shared across all codecritic modules.

These Pydantic models define the contract between the endpoint, the review
service and whatever presents the result.  Wire names are camelCase
(``lineStart``, ``fixedCode``); Python code uses the snake_case attributes.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, SecretStr


# ── Enums ────────────────────────────────────────────────────────────────────


class Severity(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def is_high(self) -> bool:
        """Critical and high findings get the stronger visual treatment."""
        return self in (Severity.CRITICAL, Severity.HIGH)


class IssueType(StrEnum):
    BUG = "bug"
    PERFORMANCE = "performance"
    SECURITY = "security"
    STYLE = "style"
    MAINTAINABILITY = "maintainability"


# ── Review Models ────────────────────────────────────────────────────────────


def _whole_number(value: Any) -> Any:
    """Accept JSON numbers with no fractional part (3 and 3.0); refuse strings and booleans."""
    if isinstance(value, (bool, str)):
        raise ValueError("line numbers must be JSON numbers")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("line numbers must be whole numbers")
        return int(value)
    return value


LineNumber = Annotated[int, BeforeValidator(_whole_number), Field(ge=1)]


class Issue(BaseModel):
    """A single finding returned by the model.

    ``line_end`` may be absent or smaller than ``line_start``; use
    :attr:`line_range` rather than reading the raw fields.
    """

    model_config = ConfigDict(extra="ignore")

    title: str
    description: str
    severity: Severity
    type: IssueType | None = None
    line_start: LineNumber | None = Field(default=None, alias="lineStart")
    line_end: LineNumber | None = Field(default=None, alias="lineEnd")
    suggestion: str | None = None

    @property
    def line_range(self) -> tuple[int, int] | None:
        """Affected ``(start, end)`` lines, end clamped to start; None if unplaced."""
        if self.line_start is None:
            return None
        end = self.line_end if self.line_end is not None else self.line_start
        return self.line_start, max(end, self.line_start)


class ReviewResult(BaseModel):
    """Structured output of one review: issues in model order plus the fixed code."""

    model_config = ConfigDict(extra="ignore")

    issues: list[Issue] = Field(default_factory=list)
    fixed_code: str = Field(default="", alias="fixedCode")

    @property
    def has_fix(self) -> bool:
        return bool(self.fixed_code)

    def to_wire(self) -> dict:
        """JSON-ready dict using the camelCase wire names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ReviewRequest(BaseModel):
    """One submit-for-review call. Built per user action and then discarded."""

    code: str = ""
    language: str | None = None
    model_id: str | None = None
    credential: SecretStr | None = None
