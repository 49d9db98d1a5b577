"""
Detail Gap Detector

Flags technical queries that are missing the context a model needs to give
a precise answer (code, logs, versions, names, environment).

Six independent signals are computed over the raw query text, then five
rules append canned descriptions in a fixed order. Rules never suppress
each other and the result is not deduplicated: callers may rely on the
exact order and count of entries.
"""

import re
from dataclasses import dataclass
from typing import List

# Gap descriptions (shown to the user verbatim)
CODE_CONTEXT = "code snippets showing the error context"
LOGS_OR_TRACES = "relevant logs or stack traces"
VERSION_NUMBERS = "version numbers (framework, library, runtime versions)"
EXACT_NAMES = "exact function names, API endpoints, or library names"
ENVIRONMENT_DETAILS = "environment details (OS, runtime version, framework)"
ERROR_MESSAGES_OR_CODE = "specific error messages or code snippets"
TERMINOLOGY = "exact terminology and context"

# Log vocabulary only counts for queries long enough to contain pasted output
LOG_LENGTH_THRESHOLD = 100
# Below this length a technical-sounding query is considered too vague
SHORT_QUERY_THRESHOLD = 50

# All signal patterns are case-insensitive, including the mixed-case
# identifier pattern in NAME_PATTERNS.
ERROR_PATTERNS = [
    r"error|exception|failure|crash|traceback|stack trace|failed",
    r"Error:|Exception:|at\s+\w+\.\w+",
]

CODE_PATTERNS = [
    r"```|function\s+\w+|const\s+\w+|let\s+\w+|var\s+\w+|import\s+|require\(|\.\w+\(",
    r"[a-z]\w*\([^)]*\)",  # function calls
    r"\w+\.\w+\s*=",  # property assignments
]

VERSION_PATTERNS = [
    r"\d+\.\d+(\.\d+)?",
    r"version\s*\d+|v\d+",
]

NAME_PATTERNS = [
    r"[A-Z][a-z]+[A-Z]|\.\w+\(|::\w+|api\.|sdk\.",
]

LOG_PATTERN = r"log|console|output|print|trace|debug"

ENVIRONMENT_PATTERN = (
    r"node|python|java|javascript|typescript|react|vue|angular"
    r"|linux|windows|macos|ubuntu|docker"
)

TECHNICAL_PATTERN = r"problem|issue|bug|fix|solution|how to|why|debug"


def _matches_any(patterns: List[str], text: str) -> bool:
    return any(re.search(p, text, re.IGNORECASE) for p in patterns)


@dataclass(frozen=True)
class DetailSignals:
    """What kinds of context a query already carries"""
    has_errors: bool
    has_code: bool
    has_versions: bool
    has_specific_names: bool
    has_logs: bool
    has_environment: bool

    @property
    def seems_problem_solving(self) -> bool:
        return self.has_errors or self.has_code


def analyze_signals(query: str) -> DetailSignals:
    """Compute the six context signals for a query."""
    has_logs = bool(re.search(LOG_PATTERN, query, re.IGNORECASE)) and (
        len(query) > LOG_LENGTH_THRESHOLD or "\n" in query
    )
    return DetailSignals(
        has_errors=_matches_any(ERROR_PATTERNS, query),
        has_code=_matches_any(CODE_PATTERNS, query),
        has_versions=_matches_any(VERSION_PATTERNS, query),
        has_specific_names=_matches_any(NAME_PATTERNS, query),
        has_logs=has_logs,
        has_environment=bool(re.search(ENVIRONMENT_PATTERN, query.lower())),
    )


def detect_missing_details(query: str) -> List[str]:
    """
    List the kinds of detail a query is missing.

    Args:
        query: Raw user query

    Returns:
        Gap descriptions in rule order; empty when nothing is missing
    """
    signals = analyze_signals(query)
    missing: List[str] = []

    if signals.has_errors and not signals.has_code and not signals.has_logs:
        missing.append(CODE_CONTEXT)
        missing.append(LOGS_OR_TRACES)

    if not signals.has_versions and (signals.has_code or signals.has_environment):
        missing.append(VERSION_NUMBERS)

    if not signals.has_specific_names and (signals.has_code or signals.has_errors):
        missing.append(EXACT_NAMES)

    if signals.has_errors and not signals.has_environment:
        missing.append(ENVIRONMENT_DETAILS)

    seems_technical = signals.seems_problem_solving or bool(
        re.search(TECHNICAL_PATTERN, query.lower())
    )
    if (
        seems_technical
        and not missing
        and len(query) < SHORT_QUERY_THRESHOLD
        and not signals.has_code
        and not signals.has_errors
    ):
        missing.append(ERROR_MESSAGES_OR_CODE)
        missing.append(TERMINOLOGY)

    return missing
