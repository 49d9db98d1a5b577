"""
Sonar Router

Routes natural-language queries to Perplexity Sonar models.

Philosophy:
- Pick the cheapest model that fits the query, unless the caller insists
- Tell the caller what their query is missing, never rewrite their answer
- Classification and gap detection are pure text analysis (no LLM calls)

Usage:
    from sonar_router.common import load_config, CompletionClient
    from sonar_router.routing import Dispatcher, classify_query, detect_missing_details
"""

__version__ = "0.2.0"
