"""Deterministic document body generation from a source."""

import re
from dataclasses import dataclass
from typing import Optional

from app.models.source import Source

PROMPT_HEAD_LIMIT = 160
NO_SOURCE_PROMPT_HEAD = "mock-generate: no source"

NO_SOURCE_BODY = "\n".join(
    [
        "No linked source was found, so this draft is based on the document title only.",
        "",
        "Attach a source with content and generate again.",
    ]
)
EMPTY_CONTENT_NOTICE = "Source content is empty, add material and generate again."

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class GeneratedBody:
    """Rendered body plus the short head used in audit logs."""

    body: str
    prompt_head: str


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def build_prompt_head(source: Optional[Source]) -> str:
    """
    Build a single-line summary of the generation input.

    The content snippet is whitespace-collapsed and cut to
    PROMPT_HEAD_LIMIT, then the prefixed line is cut again so the whole
    head never exceeds the limit.
    """
    if source is None:
        return NO_SOURCE_PROMPT_HEAD

    snippet = _collapse(source.content or "")[:PROMPT_HEAD_LIMIT]
    head = _collapse(f"mock-generate: {source.title} | {source.source_type} | {snippet}")
    return head[:PROMPT_HEAD_LIMIT].rstrip()


def build_body(source: Optional[Source]) -> str:
    """Render the document body for a source, or the placeholder without one."""
    if source is None:
        return NO_SOURCE_BODY

    trimmed_content = (source.content or "").strip()
    intro = f"# {source.title}"
    headline = "Body" if trimmed_content else "Body (no content yet)"
    content_section = trimmed_content or EMPTY_CONTENT_NOTICE

    return "\n".join([intro, "", headline, content_section])


def generate_document_body(source: Optional[Source]) -> GeneratedBody:
    """Generate a body and prompt head. Never raises for any source."""
    return GeneratedBody(body=build_body(source), prompt_head=build_prompt_head(source))
