"""
Extract a GeneratedSummary from free-form model output.

The model is asked for bare JSON but often wraps it in a ```json fence.
FenceStripExtractor removes exactly that opening marker and a trailing ```
and nothing else: a fence without the json tag, or prose around the fence,
is left in place and fails to decode. Callers depend only on the
extract(raw) -> Outcome interface, so a stricter extractor can replace it.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Protocol

import jsonschema

from commitpilot.lib.types import Failure, FailureKind, GeneratedSummary, Outcome, Success

logger = logging.getLogger(__name__)

OPENING_FENCE = "```json"
CLOSING_FENCE = "```"

SUMMARY_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "summary.schema.json"


@lru_cache(maxsize=1)
def summary_schema() -> dict:
    """JSON Schema a decoded summary must satisfy (title non-empty, both fields present)."""
    return json.loads(SUMMARY_SCHEMA_PATH.read_text())


class SummaryExtractor(Protocol):
    def extract(self, raw_text: str) -> Outcome[GeneratedSummary]:
        ...


def strip_json_fence(text: str) -> str:
    """Trim, then drop a leading ```json and a trailing ``` if present."""
    cleaned = text.strip()
    if cleaned.startswith(OPENING_FENCE):
        cleaned = cleaned[len(OPENING_FENCE):]
    if cleaned.endswith(CLOSING_FENCE):
        cleaned = cleaned[:-len(CLOSING_FENCE)]
    return cleaned


class FenceStripExtractor:
    """Positional fence strip followed by JSON decode and schema check."""

    def extract(self, raw_text: str) -> Outcome[GeneratedSummary]:
        payload = strip_json_fence(raw_text)

        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            logger.warning(f"Summary is not valid JSON ({e}): {payload[:200]}")
            return Failure(f"Invalid JSON: {e}", FailureKind.PARSE)

        # Both fields must be present; a partial result is not defaulted
        try:
            jsonschema.validate(instance=data, schema=summary_schema())
        except jsonschema.ValidationError as e:
            where = ".".join(str(p) for p in e.absolute_path) or "(root)"
            logger.warning(f"Summary failed schema validation at {where}: {e.message}")
            return Failure(f"Schema validation failed at {where}: {e.message}", FailureKind.PARSE)

        return Success(GeneratedSummary(title=data["title"], message=data["message"]))


def extract_summary(raw_text: str) -> Outcome[GeneratedSummary]:
    """Extract with the default FenceStripExtractor."""
    return FenceStripExtractor().extract(raw_text)
