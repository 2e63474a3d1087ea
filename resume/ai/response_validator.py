# resume/ai/response_validator.py
"""
Turn raw model text into schema-conformant documents

Every model output that reaches storage or another engine goes through
ResponseValidator.parse.
"""

import json
import logging
from typing import Any, Optional, Sequence, Tuple

from pydantic import ValidationError

from resume.ai.schemas import SchemaKind, SCHEMAS, ARRAY_KINDS
from resume.errors import ResponseParseError, SchemaViolation

logger = logging.getLogger(__name__)

_PAIRS = {'{': '}', '[': ']'}


class ResponseValidator:
    """
    Recover, parse and default-fill JSON produced by the model
    """

    def parse(self, raw_text: Optional[str], kind: SchemaKind) -> Any:
        """
        Parse raw model output against a schema

        Args:
            raw_text: Untrusted model reply (may carry prose or code fences)
            kind: Target schema

        Returns:
            Validated dict (object schemas) or list (array schemas)

        Raises:
            ResponseParseError: No usable JSON could be recovered
            SchemaViolation: JSON parsed but breaks an enum or type constraint
        """
        if not raw_text or not raw_text.strip():
            raise ResponseParseError("Model returned an empty response", raw_text=raw_text)

        document = self._load(raw_text, kind)

        try:
            return self.validate_document(document, kind)
        except SchemaViolation as e:
            e.raw_text = raw_text
            logger.warning(f"Schema violation in {kind.value} response: {e}")
            raise

    def validate_document(self, document: Any, kind: SchemaKind) -> Any:
        """Validate an already-parsed document (e.g. user-supplied JSON)"""
        adapter = SCHEMAS[kind]

        if kind in ARRAY_KINDS:
            if document is None:
                document = []
            elif isinstance(document, dict):
                document = self._unwrap_list(document, kind)

        try:
            validated = adapter.validate_python(document)
        except ValidationError as e:
            raise _violation(e) from e
        return adapter.dump_python(validated, mode="json")

    def empty(self, kind: SchemaKind) -> Any:
        """Schema default for kind, e.g. the empty comparison report"""
        return self.validate_document([] if kind in ARRAY_KINDS else {}, kind)

    def _load(self, raw_text: str, kind: SchemaKind) -> Any:
        text = raw_text.strip()

        # Fast path: the whole reply is JSON
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            pass

        expected = '[' if kind in ARRAY_KINDS else '{'
        other = '{' if expected == '[' else '['

        for opener in (expected, other):
            found = self._find_balanced(text, opener)
            if found is not None:
                span_length, document = found
                logger.info(
                    f"Recovered embedded JSON from {kind.value} response "
                    f"({len(text) - span_length} chars of wrapping dropped)"
                )
                return document

        raise ResponseParseError(
            f"No parseable JSON found in {kind.value} response",
            raw_text=raw_text
        )

    def _find_balanced(self, text: str, opener: str) -> Optional[Tuple[int, Any]]:
        """
        Find the first outermost balanced span starting with opener
        that parses as JSON

        Returns:
            (span length, parsed document) or None
        """
        start = text.find(opener)
        while start != -1:
            end = _match_close(text, start)
            if end is not None:
                span = text[start:end + 1]
                try:
                    return len(span), json.loads(span)
                except json.JSONDecodeError:
                    pass
            start = text.find(opener, start + 1)
        return None

    def _unwrap_list(self, document: dict, kind: SchemaKind) -> Any:
        """Accept {} and {"<kind>": [...]} for array schemas"""
        if not document:
            return []
        inner = document.get(kind.value)
        if isinstance(inner, list):
            return inner
        raise SchemaViolation(
            f"expected a JSON array for {kind.value}, got an object"
        )


def _match_close(text: str, start: int) -> Optional[int]:
    """Index of the bracket closing text[start], aware of JSON strings"""
    stack = [_PAIRS[text[start]]]
    in_string = False
    escaped = False

    for i in range(start + 1, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == '\\':
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch in _PAIRS:
            stack.append(_PAIRS[ch])
        elif ch in ('}', ']'):
            if ch != stack[-1]:
                return None
            stack.pop()
            if not stack:
                return i
    return None


def _violation(error: ValidationError) -> SchemaViolation:
    """First pydantic error as a SchemaViolation, e.g. path work[0].type"""
    details = error.errors()
    first = details[0]
    message = first['msg']
    if len(details) > 1:
        message += f" (and {len(details) - 1} more)"
    return SchemaViolation(message, _format_loc(first['loc']))


def _format_loc(loc: Sequence) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path
