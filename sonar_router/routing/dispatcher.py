"""
Dispatcher

Pipeline for one invocation:
1. Detect missing details in the original query
2. Resolve the final operation (a plain search may be promoted)
3. Build the model-specific prompt
4. Call the completion backend (the only await)
5. Append sources and missing-detail note to the answer
"""

import logging
from typing import List, Optional, Union

from ..common.completion_client import CompletionClient
from ..common.errors import UnknownOperationError
from .classifier import QueryComplexity, classify_query
from .detail_gaps import detect_missing_details
from .postprocess import format_response
from .prompts import Operation, build_prompt, model_for

logger = logging.getLogger("sonar.router.dispatcher")

_PROMOTIONS = {
    QueryComplexity.SIMPLE: Operation.SEARCH,
    QueryComplexity.COMPLEX: Operation.REASON,
    QueryComplexity.RESEARCH: Operation.DEEP_RESEARCH,
}


def parse_operation(name: Union[str, Operation]) -> Operation:
    """Map an operation name to an Operation, rejecting unknown names."""
    if isinstance(name, Operation):
        return name
    try:
        return Operation(name)
    except ValueError:
        raise UnknownOperationError(str(name)) from None


def resolve_operation(
    requested: Union[str, Operation],
    query: str,
    force_model: bool = False,
) -> Operation:
    """
    Decide which operation actually runs.

    Only an unforced search is reclassified; reason and deep_research are
    always final.
    """
    operation = parse_operation(requested)
    if force_model or operation is not Operation.SEARCH:
        return operation
    return _PROMOTIONS[classify_query(query)]


class Dispatcher:
    """Routes queries to the completion backend and formats the replies."""

    def __init__(self, backend: CompletionClient) -> None:
        """
        Args:
            backend: Shared completion client; anything with an async
                ``complete(model, prompt)`` returning a CompletionResult
        """
        self.backend = backend

    async def dispatch(
        self,
        operation: Union[str, Operation],
        query: str,
        *,
        force_model: bool = False,
        focus_areas: Optional[List[str]] = None,
    ) -> str:
        """
        Run one query end to end.

        Raises:
            UnknownOperationError: If ``operation`` is not a known name
            BackendError: If the completion backend call fails
        """
        requested = parse_operation(operation)
        missing_details = detect_missing_details(query)
        resolved = resolve_operation(requested, query, force_model)

        if resolved is not requested:
            logger.info("Promoted %s -> %s", requested.value, resolved.value)
        logger.info(
            "Dispatching %s (model=%s, force_model=%s, missing_details=%d)",
            resolved.value, model_for(resolved), force_model, len(missing_details),
        )

        prompt = build_prompt(resolved, query, focus_areas)
        result = await self.backend.complete(model_for(resolved), prompt)

        return format_response(result.content, result.citations, missing_details)
