"""
Completion response normalization.

Completion backends answer in several shapes: a bare string, an
OpenAI-style choices list, a {'response': ...} payload, a {'content': ...}
payload or a LangChain message. Responses are classified into one variant
of a closed union, and the answer text is extracted with one branch per
variant.

Dependencies: langchain_core
System role: Answer extraction for the retrieval pipeline
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from langchain_core.messages import BaseMessage


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class ChoiceList:
    choices: Sequence[Any]


@dataclass(frozen=True)
class ResponseField:
    response: str


@dataclass(frozen=True)
class ContentField:
    content: Any


@dataclass(frozen=True)
class Unrecognized:
    raw: Any


CompletionResponse = Union[PlainText, ChoiceList, ResponseField, ContentField, Unrecognized]


def _first_choice_content(choices: Any) -> Any:
    if not isinstance(choices, Sequence) or isinstance(choices, str) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, Mapping):
        return None
    message = first.get("message")
    if not isinstance(message, Mapping):
        return None
    return message.get("content")


def _has_choice_content(choices: Any) -> bool:
    content = _first_choice_content(choices)
    if isinstance(content, str):
        return bool(content)
    return isinstance(content, Sequence)


def classify_completion(raw: Any) -> CompletionResponse:
    """
    Classify a raw completion payload.

    Args:
        raw: Whatever the completion backend returned

    Returns:
        CompletionResponse: Matching variant, Unrecognized otherwise
    """
    if isinstance(raw, str):
        return PlainText(raw)
    if isinstance(raw, BaseMessage):
        return ContentField(raw.content)
    if isinstance(raw, Mapping):
        choices = raw.get("choices")
        if _has_choice_content(choices):
            return ChoiceList(choices)
        if isinstance(raw.get("response"), str):
            return ResponseField(raw["response"])
        if "content" in raw:
            return ContentField(raw["content"])
    return Unrecognized(raw)


def _join_fragments(fragments: Sequence[Any]) -> str:
    parts: list[str] = []
    for fragment in fragments:
        if isinstance(fragment, str):
            parts.append(fragment)
        elif isinstance(fragment, Mapping) and isinstance(fragment.get("text"), str):
            parts.append(fragment["text"])
    return "".join(parts)


def _content_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, Sequence):
        return _join_fragments(content)
    return ""


def _first_choice_text(choices: Sequence[Any]) -> str:
    content = _first_choice_content(choices)
    if isinstance(content, str):
        return content
    if isinstance(content, Sequence):
        # choice fragments are {'text': ...} objects only
        return "".join(
            fragment["text"]
            for fragment in content
            if isinstance(fragment, Mapping) and isinstance(fragment.get("text"), str)
        )
    return ""


def extract_answer(response: CompletionResponse) -> str:
    """Return the trimmed answer text for a classified response ('' if none)."""
    if isinstance(response, PlainText):
        return response.text.strip()
    if isinstance(response, ChoiceList):
        return _first_choice_text(response.choices).strip()
    if isinstance(response, ResponseField):
        return response.response.strip()
    if isinstance(response, ContentField):
        return _content_text(response.content).strip()
    return ""


def extract_completion_text(raw: Any) -> str:
    """Classify and extract in one step."""
    return extract_answer(classify_completion(raw))
