"""
Tests for Detail Gap Detector

Covers the individual context signals and the order/count of the gap
descriptions produced by each rule.
"""

import pytest

from sonar_router.routing.detail_gaps import (
    CODE_CONTEXT,
    ENVIRONMENT_DETAILS,
    ERROR_MESSAGES_OR_CODE,
    EXACT_NAMES,
    LOGS_OR_TRACES,
    TERMINOLOGY,
    VERSION_NUMBERS,
    analyze_signals,
    detect_missing_details,
)

CODE_WITH_ERROR = (
    "Error: Cannot read property 'x' of undefined\n"
    "```js\n"
    "const obj = null; obj.x = 5;\n"
    "```"
)


class TestAnalyzeSignals:
    """Tests for the individual context signals"""

    def test_plain_question_has_no_technical_signals(self):
        signals = analyze_signals("What is the capital of France?")
        assert not signals.has_errors
        assert not signals.has_code
        assert not signals.has_versions
        assert not signals.has_logs
        assert not signals.has_environment

    @pytest.mark.parametrize("query", [
        "the build failed",
        "Traceback (most recent call last)",
        "app crashes on start",
        "at Foo.bar in main",
    ])
    def test_error_signal(self, query):
        assert analyze_signals(query).has_errors

    @pytest.mark.parametrize("query", [
        "```\nprint(1)\n```",
        "function handleClick",
        "const value",
        "import numpy",
        "require('fs')",
        "call foo(1, 2) twice",
        "obj.name = 3",
    ])
    def test_code_signal(self, query):
        assert analyze_signals(query).has_code

    @pytest.mark.parametrize("query", ["React 18.2", "Node 20.5.0", "version 3", "upgrade to v2"])
    def test_version_signal(self, query):
        assert analyze_signals(query).has_versions

    @pytest.mark.parametrize("query", ["getUserName", "client.fetch()", "std::vector", "use the api.example"])
    def test_name_signal(self, query):
        assert analyze_signals(query).has_specific_names

    def test_name_signal_matches_case_insensitively(self):
        # Any run of three letters satisfies the mixed-case identifier pattern
        assert analyze_signals("fix it now").has_specific_names
        assert not analyze_signals("f(x) = 1").has_specific_names

    def test_log_vocabulary_needs_length_or_newline(self):
        assert not analyze_signals("check the console").has_logs
        assert analyze_signals("check the console\nline two").has_logs
        assert analyze_signals("console " + "x" * 100).has_logs

    @pytest.mark.parametrize("query", ["on Ubuntu", "a Docker image", "my Python script", "a Vue app"])
    def test_environment_signal(self, query):
        assert analyze_signals(query).has_environment


class TestDetectMissingDetails:
    """Tests for detect_missing_details()"""

    def test_simple_factual_query_has_no_gaps(self):
        assert detect_missing_details("What is the capital of France?") == []

    def test_vague_error_question(self):
        assert detect_missing_details("How do I fix this error?") == [
            CODE_CONTEXT,
            LOGS_OR_TRACES,
            ENVIRONMENT_DETAILS,
        ]

    def test_error_without_code(self):
        assert detect_missing_details("I'm getting an error in my code") == [
            CODE_CONTEXT,
            LOGS_OR_TRACES,
            ENVIRONMENT_DETAILS,
        ]

    def test_code_block_suppresses_code_and_log_request(self):
        missing = detect_missing_details(CODE_WITH_ERROR)
        assert CODE_CONTEXT not in missing
        assert LOGS_OR_TRACES not in missing
        assert missing == [VERSION_NUMBERS, ENVIRONMENT_DETAILS]

    def test_code_block_reduces_gaps_compared_to_code_free_query(self):
        code_free = "Error: Cannot read property 'x' of undefined"
        assert len(detect_missing_details(CODE_WITH_ERROR)) < len(detect_missing_details(code_free))

    def test_code_with_console_log_and_environment(self):
        query = (
            "How do I fix this error?\n"
            "```javascript\n"
            "function test() { console.log('error'); }\n"
            "```"
        )
        assert detect_missing_details(query) == [VERSION_NUMBERS]

    def test_environment_without_versions(self):
        assert detect_missing_details("My React app is broken on Node.js") == [VERSION_NUMBERS]

    def test_environment_with_versions(self):
        assert detect_missing_details("My React 18.2.0 app is broken on Node.js 20.5.0") == []

    def test_logs_present_only_environment_missing(self):
        query = "Here is the console output from my run:\nerror: something crashed"
        assert detect_missing_details(query) == [ENVIRONMENT_DETAILS]

    def test_rules_accumulate_without_deduplication(self):
        # error + environment, no code, no version: rules 1 and 2 both fire
        assert detect_missing_details("TypeError in my python script") == [
            CODE_CONTEXT,
            LOGS_OR_TRACES,
            VERSION_NUMBERS,
        ]

    def test_code_without_names_asks_for_names(self):
        assert detect_missing_details("f(x) = 1") == [VERSION_NUMBERS, EXACT_NAMES]

    def test_short_vague_technical_question(self):
        assert detect_missing_details("Why is my build slow?") == [
            ERROR_MESSAGES_OR_CODE,
            TERMINOLOGY,
        ]

    def test_long_vague_technical_question_is_not_flagged(self):
        query = "Why is my build so slow every single time I run it on the shared machine?"
        assert len(query) >= 50
        assert detect_missing_details(query) == []

    def test_detection_is_deterministic(self):
        query = "How do I fix this error?"
        assert detect_missing_details(query) == detect_missing_details(query)
