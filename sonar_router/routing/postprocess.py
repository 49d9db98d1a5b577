"""
Response post-processing: citations and missing-detail notes.

Both sections are appended after the model's answer, never in place of it.
"""

from typing import List, Optional

SOURCES_HEADER = "Sources:"
CITATION_INSTRUCTION = (
    "Keep the inline numbered citation markers (e.g. [1], [2]) when quoting "
    "this answer; they refer to the sources below."
)

MISSING_DETAILS_HEADER = (
    "Note: your query may be missing details that would help produce a more "
    "precise answer. Consider providing:"
)
MISSING_DETAILS_FOOTER = "Add these details and ask again for a more targeted answer."


def format_sources(citations: List[str]) -> str:
    """Render citations as a Sources section, 1-based in backend order."""
    lines = [SOURCES_HEADER, CITATION_INSTRUCTION]
    lines.extend(f"{i}: {citation}" for i, citation in enumerate(citations, 1))
    return "\n".join(lines)


def format_missing_details(missing_details: List[str]) -> str:
    """Render the missing-detail note."""
    lines = ["---", MISSING_DETAILS_HEADER]
    lines.extend(f"{i}. {detail}" for i, detail in enumerate(missing_details, 1))
    lines.append("")
    lines.append(MISSING_DETAILS_FOOTER)
    return "\n".join(lines)


def format_response(
    answer: str,
    citations: Optional[List[str]] = None,
    missing_details: Optional[List[str]] = None,
) -> str:
    """Append Sources and missing-detail sections to an answer, when non-empty."""
    parts = [answer]

    if citations:
        parts.append(format_sources(citations))

    if missing_details:
        parts.append(format_missing_details(missing_details))

    return "\n\n".join(parts)
