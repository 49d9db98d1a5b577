"""
Query Classifier

Estimates how much model a query needs from keyword indicators.
Plain substring containment on the lower-cased query: no tokenizing,
no stemming, so "how" also matches "however" and "showcase".
"""

from enum import Enum


class QueryComplexity(str, Enum):
    """Complexity category of a query"""
    SIMPLE = "simple"  # "What is the capital of France?"
    COMPLEX = "complex"  # "Why does X happen?"
    RESEARCH = "research"  # "Compare and contrast X and Y"


# Checked first; wins over complex indicators.
RESEARCH_INDICATORS = (
    "analyze", "research", "investigate", "study", "examine", "explore",
    "comprehensive", "detailed", "in-depth", "thorough",
    "compare and contrast", "evaluate", "assess",
)

COMPLEX_INDICATORS = (
    "how", "why", "what if", "explain", "solve", "steps to",
    "difference between", "compare", "which is better",
    "pros and cons", "advantages", "disadvantages",
)


def classify_query(query: str) -> QueryComplexity:
    """Classify a query as simple, complex or research."""
    query_lower = query.lower()

    if any(indicator in query_lower for indicator in RESEARCH_INDICATORS):
        return QueryComplexity.RESEARCH

    if any(indicator in query_lower for indicator in COMPLEX_INDICATORS):
        return QueryComplexity.COMPLEX

    return QueryComplexity.SIMPLE
