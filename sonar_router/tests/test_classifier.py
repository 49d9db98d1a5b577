"""Tests for keyword-based query classification."""

import pytest

from sonar_router.routing.classifier import (
    COMPLEX_INDICATORS,
    RESEARCH_INDICATORS,
    QueryComplexity,
    classify_query,
)


class TestClassifyQuery:
    def test_simple_factual_query(self):
        assert classify_query("What is the capital of France?") == QueryComplexity.SIMPLE

    def test_empty_query_is_simple(self):
        assert classify_query("") == QueryComplexity.SIMPLE

    @pytest.mark.parametrize("query", [
        "Why is the sky blue?",
        "Explain quantum entanglement",
        "What are the pros and cons of remote work?",
        "Compare REST and GraphQL",
    ])
    def test_complex_queries(self, query):
        assert classify_query(query) == QueryComplexity.COMPLEX

    @pytest.mark.parametrize("query", [
        "Compare and contrast REST and GraphQL",
        "Give me a comprehensive overview of battery chemistry",
        "Investigate the causes of the 2008 crisis",
    ])
    def test_research_queries(self, query):
        assert classify_query(query) == QueryComplexity.RESEARCH

    def test_research_wins_over_complex(self):
        # "how" and "why" are complex indicators, "analyze" is research
        query = "Analyze how and why inflation affects savings"
        assert classify_query(query) == QueryComplexity.RESEARCH

    def test_matching_is_case_insensitive(self):
        assert classify_query("EXPLAIN THIS") == QueryComplexity.COMPLEX
        assert classify_query("In-Depth look at Rust") == QueryComplexity.RESEARCH

    def test_matching_is_plain_substring(self):
        # "how" inside "showcase" still counts
        assert classify_query("Showcase of modern art") == QueryComplexity.COMPLEX

    def test_every_research_indicator_classifies_as_research(self):
        for indicator in RESEARCH_INDICATORS:
            assert classify_query(f"please {indicator} this") == QueryComplexity.RESEARCH

    def test_every_complex_indicator_without_research_is_complex(self):
        for indicator in COMPLEX_INDICATORS:
            assert classify_query(f"{indicator} it") == QueryComplexity.COMPLEX

    def test_classification_is_deterministic(self):
        query = "Which is better for web apps, Django or Flask?"
        assert classify_query(query) == classify_query(query) == QueryComplexity.COMPLEX
