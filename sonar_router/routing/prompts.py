"""
Prompt Builder

One row per operation: the backend model it is bound to and the template
used to instruct that model. Templates embed the raw query verbatim.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence


class Operation(str, Enum):
    """Named entry points exposed to callers"""
    SEARCH = "search"
    REASON = "reason"
    DEEP_RESEARCH = "deep_research"


SEARCH_PROMPT = """Provide a clear, concise answer to: {query}

If the query includes specific details (error messages, code, version numbers, function names, or environment), use them to give a precise answer. Answer directly and keep it short."""


REASON_PROMPT = """Provide a detailed explanation and analysis for: {query}

Include:
1. Step-by-step reasoning
2. Key considerations
3. Relevant examples
4. Practical implications
5. Potential alternatives

Tailor every part of the explanation to the specific details given in the query (error messages, code snippets, version numbers, function names, environment)."""


DEEP_RESEARCH_PROMPT = "Conduct comprehensive research on: {query}"

FOCUS_AREAS_SECTION = "\n\nFocus areas:\n{focus_areas}"

DEEP_RESEARCH_CLOSING = """

Provide a detailed analysis including:
1. Background and context
2. Key concepts and definitions
3. Current state of knowledge
4. Different perspectives
5. Recent developments
6. Practical applications
7. Challenges and limitations
8. Future directions
9. Expert opinions
10. References to sources
11. Tailoring of all of the above to the exact technical details given in the query (versions, function names, error messages, environment)"""


@dataclass(frozen=True)
class OperationSpec:
    """Backend model and prompt template bound to an operation"""
    operation: Operation
    model: str
    template: str


OPERATION_SPECS: Dict[Operation, OperationSpec] = {
    Operation.SEARCH: OperationSpec(Operation.SEARCH, "sonar-pro", SEARCH_PROMPT),
    Operation.REASON: OperationSpec(Operation.REASON, "sonar-reasoning-pro", REASON_PROMPT),
    Operation.DEEP_RESEARCH: OperationSpec(
        Operation.DEEP_RESEARCH, "sonar-deep-research", DEEP_RESEARCH_PROMPT
    ),
}


def model_for(operation: Operation) -> str:
    """Backend model identifier for an operation."""
    return OPERATION_SPECS[operation].model


def _format_numbered(items: Sequence[str]) -> str:
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, 1))


def build_prompt(
    operation: Operation,
    query: str,
    focus_areas: Optional[List[str]] = None,
) -> str:
    """
    Build the prompt sent to the backend for a resolved operation.

    Args:
        operation: Resolved operation
        query: Raw user query, embedded verbatim
        focus_areas: Optional aspects to emphasize (deep_research only;
            ignored for other operations)

    Returns:
        Prompt text
    """
    prompt = OPERATION_SPECS[operation].template.format(query=query)

    if operation is Operation.DEEP_RESEARCH:
        if focus_areas:
            prompt += FOCUS_AREAS_SECTION.format(focus_areas=_format_numbered(focus_areas))
        prompt += DEEP_RESEARCH_CLOSING

    return prompt
