"""Request builder: the review instruction and its generation parameters."""

from __future__ import annotations

from codecritic.core.config import Settings
from codecritic.llm.base import GenerationConfig

ROLE_INSTRUCTION = (
    "You are an expert code reviewer. Analyze the provided code for bugs, "
    "performance issues, security risks, and maintainability."
)

OUTPUT_CONTRACT = """Return strictly a JSON object matching this schema: {
  "issues": [{
    "title": string,
    "description": string,
    "severity": "low" | "medium" | "high" | "critical",
    "type"?: "bug" | "performance" | "security" | "style" | "maintainability",
    "lineStart"?: number,
    "lineEnd"?: number,
    "suggestion"?: string
  }],
  "fixedCode": string
}
If line numbers are unknown, omit them. Provide a safe, minimal-diff fixed version of the code in fixedCode."""


def build_review_prompt(code: str, language: str | None = None) -> str:
    """Build the single instruction message sent to the model.

    The code is embedded verbatim in a fence labelled with the language hint.
    """
    return (
        f"{ROLE_INSTRUCTION}\n"
        f"{OUTPUT_CONTRACT}\n\n"
        f"Language: {language or 'auto'}\n"
        f"Code:\n```{language or ''}\n"
        f"{code}\n"
        "```"
    )


def build_generation_config(settings: Settings) -> GenerationConfig:
    return GenerationConfig(
        temperature=settings.temperature,
        max_output_tokens=settings.max_output_tokens,
        response_mime_type=settings.response_mime_type,
    )
