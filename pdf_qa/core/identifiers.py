"""
Stage identifier validation and candidate resolution.

The storage layout changed over the system's lifetime: early uploads were
stored flat as '<fileId>-<filename>' (sometimes nested under the canonical
folder), current uploads live at '<fileId>/<filename>'. Resolution turns a
caller reference plus any known document pointer into an ordered,
de-duplicated list of (stage, key) candidates, most likely first.

Dependencies: pdf_qa.core.exceptions
System role: Identifier grammar and legacy layout resolution
"""

import re
from dataclasses import dataclass

from pdf_qa.core.exceptions import ClientInputError

IDENTIFIER_PATTERN = re.compile(r"^[\w.\-/ ]+$")
STAGE_PATTERN = re.compile(r"^@?[\w.]+$")
LEGACY_FLAT_IDENTIFIER = re.compile(
    r"^([0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12})-(.+)$",
    re.IGNORECASE,
)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-z0-9.\-_ ]", re.IGNORECASE)
_WHITESPACE_RUN = re.compile(r"\s+")
DEFAULT_FILENAME = "document.pdf"


@dataclass(frozen=True)
class Candidate:
    """One storage key + stage pairing to try."""

    identifier: str
    stage_reference: str

    @property
    def key(self) -> str:
        """De-duplication key."""
        return f"{self.stage_reference}::{self.identifier}"


@dataclass(frozen=True)
class DocumentPointer:
    """What is known about a stored document when resolving its bytes."""

    file_id: str
    filename: str
    stage_path: str | None = None
    stage_reference: str | None = None


def sanitize_filename(filename: str | None) -> str:
    """
    Turn an upload name into a safe lowercase slug ending in '.pdf'.

    Args:
        filename: Original client filename

    Returns:
        str: Safe filename, 'document.pdf' when nothing usable remains
    """
    if not filename or not isinstance(filename, str):
        return DEFAULT_FILENAME
    trimmed = filename.strip().lower()
    safe = _WHITESPACE_RUN.sub("-", _UNSAFE_FILENAME_CHARS.sub("-", trimmed))
    final_name = safe or DEFAULT_FILENAME
    return final_name if final_name.endswith(".pdf") else f"{final_name}.pdf"


def sanitize_identifier(identifier: str) -> str:
    """
    Validate a caller-supplied stage key.

    Args:
        identifier: Relative key inside a stage

    Returns:
        str: Trimmed identifier

    Raises:
        ClientInputError: Unsupported characters or '..' sequences
    """
    trimmed = identifier.strip()
    if not IDENTIFIER_PATTERN.match(trimmed):
        raise ClientInputError(
            'Identifier contains unsupported characters. Use alphanumerics, "/", ".", "-", "_" or spaces.',
            field="identifier",
        )
    if ".." in trimmed:
        raise ClientInputError("Identifier cannot contain \"..\" sequences.", field="identifier")
    return trimmed


def sanitize_stage_reference(reference: str | None, default: str) -> str:
    """
    Validate a stage reference and add the '@' marker when missing.

    Args:
        reference: Caller or stored stage reference
        default: Stage used when reference is empty

    Returns:
        str: '@'-prefixed stage reference

    Raises:
        ClientInputError: Unsupported characters
    """
    trimmed = reference.strip() if reference else ""
    if not trimmed:
        return default
    if not STAGE_PATTERN.match(trimmed):
        raise ClientInputError("Stage reference contains unsupported characters.", field="stage")
    return trimmed if trimmed.startswith("@") else f"@{trimmed}"


def extract_relative_stage_path(value: str | None) -> str | None:
    """
    Strip a stored path down to the key relative to its stage.

    Accepts '@STAGE/key', 'scheme://host/key' or a bare key.
    """
    if not value or not isinstance(value, str):
        return None
    normalized = value.strip()
    if not normalized:
        return None
    if normalized.startswith("@"):
        _, slash, rest = normalized.partition("/")
        return rest if slash else None
    protocol_index = normalized.find("://")
    if protocol_index >= 0:
        first_slash = normalized.find("/", protocol_index + 3)
        return normalized[first_slash + 1:] if first_slash >= 0 else None
    return normalized


def extract_stage_reference_from_path(value: str | None) -> str | None:
    """Return the '@STAGE' prefix of a stored path, if it carries one."""
    if not value or not isinstance(value, str):
        return None
    trimmed = value.strip()
    if not trimmed.startswith("@"):
        return None
    return trimmed.split("/", 1)[0]


def extract_legacy_tail_info(identifier: str | None) -> tuple[str, str] | None:
    """
    Split a '<uuid>-<filename>' last path segment.

    Returns:
        tuple[str, str] | None: (file_id, filename) or None when the tail
        does not follow the flat legacy layout
    """
    if not identifier:
        return None
    segments = [segment for segment in identifier.strip().split("/") if segment]
    if not segments:
        return None
    match = LEGACY_FLAT_IDENTIFIER.match(segments[-1])
    if not match:
        return None
    return match.group(1), match.group(2)


def build_legacy_candidate_identifier(
    identifier: str | None,
    pointer: DocumentPointer | None,
) -> str | None:
    """
    Build '<identifier>/<fileId>-<filename>' for folder-style identifiers.

    The file id and name come from the pointer, else from the last two path
    segments. Returns None for flat identifiers and for identifiers that
    already end in the combined suffix.
    """
    if not identifier:
        return None
    trimmed = identifier.strip().rstrip("/")
    if "/" not in trimmed:
        return None
    segments = trimmed.split("/")
    fallback_id = (pointer.file_id if pointer else None) or segments[-2]
    fallback_name = (pointer.filename if pointer else None) or segments[-1]
    if not fallback_id or not fallback_name:
        return None
    legacy_suffix = f"{fallback_id}-{fallback_name}"
    if trimmed.endswith(f"/{legacy_suffix}"):
        return None
    return f"{trimmed}/{legacy_suffix}"


class _CandidateList:
    """Ordered candidate accumulator with stage::identifier de-duplication."""

    def __init__(self, default_stage: str) -> None:
        self._default_stage = default_stage
        self._seen: set[str] = set()
        self.items: list[Candidate] = []

    def add(self, identifier: str | None, stage_reference: str | None) -> None:
        if not identifier or not identifier.strip():
            return
        stage = sanitize_stage_reference(stage_reference or self._default_stage, self._default_stage)
        candidate = Candidate(identifier=identifier.strip(), stage_reference=stage)
        if candidate.key in self._seen:
            return
        self._seen.add(candidate.key)
        self.items.append(candidate)

    def add_canonical_variants(self, file_id: str, filename: str, stage_reference: str | None) -> None:
        if not file_id or not filename:
            return
        canonical = f"{file_id}/{filename}"
        self.add(canonical, stage_reference)
        self.add(f"{canonical}/{file_id}-{filename}", stage_reference)


def build_stage_candidates(
    request_identifier: str | None,
    request_stage: str | None,
    pointer: DocumentPointer | None,
    default_stage: str,
) -> list[Candidate]:
    """
    Produce the ordered candidates to probe for one document.

    Order: the caller identifier, its legacy combined form, the canonical
    pair inferred from a '<uuid>-<name>' tail, the pointer's stage path and
    its legacy form, then the pointer's canonical pair.

    Args:
        request_identifier: Caller-supplied key (already validated)
        request_stage: Caller-supplied stage reference
        pointer: Stored document info, when the caller gave a known file id
        default_stage: Configured default stage reference

    Returns:
        list[Candidate]: De-duplicated candidates, most likely first

    Raises:
        ClientInputError: A stage reference has unsupported characters
    """
    fallback_stage = (pointer.stage_reference if pointer else None) or request_stage or default_stage
    candidates = _CandidateList(sanitize_stage_reference(fallback_stage, default_stage))

    if request_identifier:
        candidates.add(request_identifier, request_stage)
        candidates.add(build_legacy_candidate_identifier(request_identifier, pointer), request_stage)
        inferred = extract_legacy_tail_info(request_identifier)
        if inferred:
            candidates.add_canonical_variants(inferred[0], inferred[1], request_stage)

    if pointer and pointer.stage_path:
        candidates.add(pointer.stage_path, pointer.stage_reference)
        candidates.add(
            build_legacy_candidate_identifier(pointer.stage_path, pointer),
            pointer.stage_reference,
        )

    if pointer and pointer.file_id and pointer.filename:
        candidates.add_canonical_variants(pointer.file_id, pointer.filename, pointer.stage_reference)

    return candidates.items
