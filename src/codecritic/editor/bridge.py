"""Editor bridge: hand a ReviewResult to whatever editor is showing the code.

The review core never touches an editor directly.  An editor integration
implements :class:`EditorSurface`; the helpers here turn a result into
decorations, navigation and fix application against that surface.
"""

from __future__ import annotations

import difflib
from abc import ABC, abstractmethod

from pydantic import BaseModel

from codecritic.core.logging import get_logger
from codecritic.core.models import Issue, ReviewResult, Severity

logger = get_logger(__name__)

LINE_CLASS = "ai-issue-line"
GLYPH_CLASS = "ai-issue-glyph"
GLYPH_CLASS_HIGH = "ai-issue-glyph-high"


class LineDecoration(BaseModel):
    """Whole-line marker over ``[start_line, end_line]`` (1-indexed, inclusive)."""

    start_line: int
    end_line: int
    severity: Severity
    line_class: str = LINE_CLASS
    glyph_class: str = GLYPH_CLASS
    hover_message: str = ""


class IssueEntry(BaseModel):
    """One row of the clickable findings list."""

    index: int
    title: str
    description: str
    severity: Severity
    type: str | None = None
    lines: str | None = None
    suggestion: str | None = None
    jumpable: bool = False


class EditorSurface(ABC):
    """Capabilities an editor must offer to display a review."""

    @property
    @abstractmethod
    def line_count(self) -> int:
        ...

    @abstractmethod
    def get_text(self) -> str:
        ...

    @abstractmethod
    def set_text(self, text: str) -> None:
        ...

    @abstractmethod
    def reveal_line(self, line: int) -> None:
        """Scroll so ``line`` is visible (centered where the editor can)."""
        ...

    @abstractmethod
    def set_cursor(self, line: int, column: int = 1) -> None:
        ...

    @abstractmethod
    def set_decorations(self, decorations: list[LineDecoration]) -> None:
        """Replace any previous review decorations with ``decorations``."""
        ...


def decoration_for(issue: Issue) -> LineDecoration | None:
    line_range = issue.line_range
    if line_range is None:
        return None
    start, end = line_range
    return LineDecoration(
        start_line=start,
        end_line=end,
        severity=issue.severity,
        glyph_class=GLYPH_CLASS_HIGH if issue.severity.is_high else GLYPH_CLASS,
        hover_message=f"{issue.severity.value.upper()}: {issue.title}\n\n{issue.description}",
    )


def build_decorations(result: ReviewResult) -> list[LineDecoration]:
    """Decorations for every issue with a line, in result order."""
    decorations = []
    for issue in result.issues:
        decoration = decoration_for(issue)
        if decoration is not None:
            decorations.append(decoration)
    return decorations


def apply_decorations(surface: EditorSurface, result: ReviewResult) -> bool:
    """Mark affected lines on the surface.

    Best effort: a failing editor must not fail the review, so errors are
    logged and reported as ``False``.
    """
    try:
        surface.set_decorations(build_decorations(result))
    except Exception as e:
        logger.warning("decoration_failed", error=str(e))
        return False
    return True


def format_lines(issue: Issue) -> str | None:
    """Label for the same clamped range the decorations cover."""
    line_range = issue.line_range
    if line_range is None:
        return None
    start, end = line_range
    if end != start:
        return f"Lines {start}–{end}"
    return f"Lines {start}"


def issue_entries(result: ReviewResult) -> list[IssueEntry]:
    return [
        IssueEntry(
            index=idx,
            title=issue.title,
            description=issue.description,
            severity=issue.severity,
            type=issue.type.value if issue.type else None,
            lines=format_lines(issue),
            suggestion=issue.suggestion,
            jumpable=issue.line_start is not None,
        )
        for idx, issue in enumerate(result.issues)
    ]


def clamp_line(line: int, line_count: int) -> int:
    return max(1, min(line, max(line_count, 1)))


def jump_to_issue(surface: EditorSurface, issue: Issue) -> int | None:
    """Move viewport and cursor to the issue's first line.

    Returns the line actually used after clamping, or None when the issue has
    no line to jump to.
    """
    if issue.line_start is None:
        return None
    line = clamp_line(issue.line_start, surface.line_count)
    surface.reveal_line(line)
    surface.set_cursor(line, 1)
    return line


def apply_fix(surface: EditorSurface, result: ReviewResult) -> bool:
    """Replace the editor contents with the suggested fix, if there is one."""
    if not result.has_fix:
        return False
    surface.set_text(result.fixed_code)
    return True


def fix_diff(original: str, result: ReviewResult, *, context: int = 3) -> str:
    """Unified diff from the current code to ``fixedCode``; empty without a fix."""
    if not result.has_fix:
        return ""
    return "".join(
        difflib.unified_diff(
            original.splitlines(keepends=True),
            result.fixed_code.splitlines(keepends=True),
            fromfile="original",
            tofile="fixed",
            n=context,
        )
    )


class ReviewSession:
    """Transient holder for the latest review shown in one editor.

    Reviews may resolve out of order.  Each :meth:`begin` hands out a new
    generation; :meth:`accept` keeps a result only if its generation is still
    the newest, so a slow earlier call cannot overwrite a later one.
    """

    def __init__(self) -> None:
        self._generation = 0
        self.current: ReviewResult | None = None

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self) -> int:
        self._generation += 1
        self.current = None
        return self._generation

    def accept(self, generation: int, result: ReviewResult) -> bool:
        if generation != self._generation:
            logger.info("stale_review_discarded", generation=generation, latest=self._generation)
            return False
        self.current = result
        return True

    def show(self, surface: EditorSurface) -> bool:
        """Decorate the surface with the current result."""
        if self.current is None:
            return False
        return apply_decorations(surface, self.current)
