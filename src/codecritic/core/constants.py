"""Constants and mappings used across the application."""

from __future__ import annotations

import os

# ── Gemini endpoint ──────────────────────────────────────────────────────────

DEFAULT_MODEL: str = "gemini-2.5-flash"
GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/models"

DEFAULT_TEMPERATURE: float = 0.1
DEFAULT_MAX_OUTPUT_TOKENS: int = 2000
DEFAULT_RESPONSE_MIME_TYPE: str = "application/json"

# How much of an error body is kept in TransportError messages / logs
ERROR_BODY_EXCERPT_CHARS: int = 500

# ── Languages ────────────────────────────────────────────────────────────────

# Hints offered by the review UI, in display order
SUPPORTED_LANGUAGES: dict[str, str] = {
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "python": "Python",
    "java": "Java",
    "csharp": "C#",
    "c": "C",
    "cpp": "C++",
    "lua": "Lua",
}

# Editors without a dedicated C mode highlight it as C++
EDITOR_LANGUAGE_OVERRIDES: dict[str, str] = {
    "c": "cpp",
}

EXTENSION_LANGUAGE_MAP: dict[str, str] = {
    ".py": "python",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".java": "java",
    ".kt": "kotlin",
    ".go": "go",
    ".rs": "rust",
    ".rb": "ruby",
    ".php": "php",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".hpp": "cpp",
    ".cs": "csharp",
    ".lua": "lua",
    ".swift": "swift",
    ".scala": "scala",
    ".sql": "sql",
    ".sh": "shell",
    ".bash": "shell",
}


def detect_language(filename: str) -> str | None:
    """Detect programming language from file extension."""
    _, ext = os.path.splitext(filename.lower())
    return EXTENSION_LANGUAGE_MAP.get(ext)


def editor_language(language: str | None) -> str | None:
    """Map a review language hint to the editor's syntax mode."""
    if language is None:
        return None
    return EDITOR_LANGUAGE_OVERRIDES.get(language, language)
