"""
Test suite for completion response normalization.

System role: Verification of answer extraction across response shapes
"""

import pytest
from langchain_core.messages import AIMessage

from pdf_qa.core.completion import (
    ChoiceList,
    ContentField,
    PlainText,
    ResponseField,
    Unrecognized,
    classify_completion,
    extract_answer,
    extract_completion_text,
)


class TestClassifyCompletion:
    """Tests for response classification."""

    def test_string_should_be_plain_text(self) -> None:
        assert classify_completion(" hi ") == PlainText(" hi ")

    def test_choices_should_be_choice_list(self) -> None:
        raw = {"choices": [{"message": {"content": "X"}}]}

        assert isinstance(classify_completion(raw), ChoiceList)

    def test_response_key_should_be_response_field(self) -> None:
        assert classify_completion({"response": "Y"}) == ResponseField("Y")

    def test_langchain_message_should_be_content_field(self) -> None:
        assert classify_completion(AIMessage(content="Z")) == ContentField("Z")

    def test_unknown_shapes_should_be_unrecognized(self) -> None:
        assert isinstance(classify_completion(None), Unrecognized)
        assert isinstance(classify_completion(42), Unrecognized)
        assert isinstance(classify_completion({"other": 1}), Unrecognized)


class TestExtractCompletionText:
    """Tests for answer extraction."""

    def test_choices_message_content_should_extract_exactly(self) -> None:
        """Test {choices:[{message:{content:'X'}}]} extracts 'X'."""
        assert extract_completion_text({"choices": [{"message": {"content": "X"}}]}) == "X"

    def test_choice_fragments_should_be_joined(self) -> None:
        raw = {"choices": [{"message": {"content": [{"text": "Hel"}, {"text": "lo "}, {"image": "x"}]}}]}

        assert extract_completion_text(raw) == "Hello"

    def test_plain_string_should_be_trimmed(self) -> None:
        assert extract_completion_text("  answer \n") == "answer"

    def test_content_fragments_should_accept_strings_and_text_objects(self) -> None:
        raw = {"content": ["Part one, ", {"text": "part two"}, {"type": "image"}]}

        assert extract_completion_text(raw) == "Part one, part two"

    def test_langchain_message_with_blocks_should_be_joined(self) -> None:
        message = AIMessage(content=[{"type": "text", "text": "Block answer"}])

        assert extract_completion_text(message) == "Block answer"

    def test_empty_choices_should_fall_through_to_response(self) -> None:
        assert extract_completion_text({"choices": [], "response": "fallback"}) == "fallback"

    def test_empty_choice_content_should_fall_through_to_response(self) -> None:
        raw = {"choices": [{"message": {"content": ""}}], "response": "X"}

        assert isinstance(classify_completion(raw), ResponseField)
        assert extract_completion_text(raw) == "X"

    def test_choice_without_content_should_fall_through_to_content(self) -> None:
        raw = {"choices": [{"message": {"role": "assistant"}}], "content": "from content"}

        assert extract_completion_text(raw) == "from content"

    @pytest.mark.parametrize("raw", [None, 3.5, {"choices": [{"message": {}}]}, {"content": 7}])
    def test_unusable_payloads_should_extract_empty(self, raw) -> None:
        assert extract_completion_text(raw) == ""

    def test_unrecognized_branch_should_return_empty(self) -> None:
        assert extract_answer(Unrecognized(object())) == ""
