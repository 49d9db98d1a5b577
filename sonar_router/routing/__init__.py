"""
Routing - Query Analysis and Model Selection

Key Components:
- classify_query: Keyword-based complexity classification
- detect_missing_details: Flags under-specified technical queries
- build_prompt: Per-operation prompt templates
- format_response: Sources and missing-detail sections
- Dispatcher: Ties the above to the completion backend

Pipeline:
1. Detect missing details in the query
2. Resolve operation (promote unforced searches by complexity)
3. Build prompt and call the model bound to the operation
4. Format the answer
"""

from .classifier import QueryComplexity, classify_query
from .detail_gaps import DetailSignals, analyze_signals, detect_missing_details
from .dispatcher import Dispatcher, parse_operation, resolve_operation
from .postprocess import format_response
from .prompts import OPERATION_SPECS, Operation, OperationSpec, build_prompt, model_for

__all__ = [
    "QueryComplexity",
    "classify_query",
    "DetailSignals",
    "analyze_signals",
    "detect_missing_details",
    "Dispatcher",
    "parse_operation",
    "resolve_operation",
    "format_response",
    "OPERATION_SPECS",
    "Operation",
    "OperationSpec",
    "build_prompt",
    "model_for",
]
