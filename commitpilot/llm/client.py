"""
Summary generation via the Anthropic Messages API.

Sends a bounded diff with a fixed instruction prompt and turns the reply
into a GeneratedSummary. Single request, no streaming and no retries.
"""

import json
import logging
from http.client import HTTPException
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from commitpilot.lib.config import load_config
from commitpilot.lib.prompts import load_prompt, render_prompt
from commitpilot.lib.types import Failure, FailureKind, GeneratedSummary, Outcome, Success
from commitpilot.llm.extract import FenceStripExtractor

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"

# Only the first MAX_DIFF_CHARS characters of a diff are sent
MAX_DIFF_CHARS = 5000


def truncate_diff(diff: str, limit: int = MAX_DIFF_CHARS) -> str:
    """Keep the beginning of the diff, silently dropping the rest."""
    if len(diff) > limit:
        return diff[:limit]
    return diff


class GenerationClient:
    def __init__(self, config, extractor=None, timeout: float | None = None):
        """
        Args:
            config: Config source; api key, model, endpoint are read per call
            extractor: Object with extract(raw_text) -> Outcome[GeneratedSummary]
            timeout: Socket timeout in seconds, None for the urllib default
        """
        self.config = config
        self.extractor = extractor or FenceStripExtractor()
        self.timeout = timeout

    def build_request_body(self, diff: str, model: str, max_tokens: int) -> dict:
        """Messages API body for an already-truncated diff."""
        return {
            "model": model,
            "max_tokens": max_tokens,
            "system": load_prompt("summary_system"),
            "messages": [
                {
                    "role": "user",
                    "content": render_prompt("summary_user", diff=diff),
                }
            ],
        }

    def generate_summary(self, diff_text: str) -> Outcome[GeneratedSummary]:
        """
        Generate a title and message for diff_text.

        Returns Failure when settings cannot be loaded, the API key is
        missing, diff_text is empty, the request fails or returns non-200
        (body included in the reason), or the reply cannot be parsed.
        """
        loaded = load_config(self.config)
        if not loaded.ok:
            return loaded
        config = loaded.value
        if not config.api_key:
            return Failure("Claude API key not configured", FailureKind.CONFIGURATION_MISSING)
        if not diff_text:
            return Failure("No diff provided", FailureKind.INVALID_INPUT)

        diff = truncate_diff(diff_text)
        if len(diff) < len(diff_text):
            logger.debug(f"Diff truncated from {len(diff_text)} to {len(diff)} characters")

        body = self.build_request_body(diff, config.model, config.max_tokens)
        headers = {
            "Content-Type": "application/json",
            "x-api-key": config.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }

        raw = self._send(config.api_url, json.dumps(body).encode(), headers)
        if not raw.ok:
            return raw

        text = self._response_text(raw.value)
        if text is None:
            return Failure("Failed to parse response", FailureKind.PARSE)

        summary = self.extractor.extract(text)
        if not summary.ok:
            return Failure(f"Failed to parse response: {summary.reason}", FailureKind.PARSE)

        logger.info(f"Generated summary: {summary.value.title}")
        return summary

    def _send(self, url: str, body: bytes, headers: dict) -> Outcome[bytes]:
        kwargs = {} if self.timeout is None else {"timeout": self.timeout}
        try:
            request = Request(url, data=body, headers=headers, method="POST")
            with urlopen(request, **kwargs) as response:
                status = response.status
                data = response.read()
        except HTTPError as e:
            error_body = e.read().decode("utf-8", errors="replace") if e.fp else ""
            logger.warning(f"API request failed with status {e.code}")
            return Failure(
                f"API request failed with status {e.code}: {error_body or e.reason}",
                FailureKind.NETWORK,
            )
        except (URLError, OSError) as e:
            reason = getattr(e, "reason", e)
            logger.warning(f"API request failed: {reason}")
            return Failure(f"API request failed: {reason}", FailureKind.NETWORK)
        except (ValueError, HTTPException) as e:
            # Malformed API_URL, or a connection dropped mid-response
            logger.warning(f"API request failed: {e!r}")
            return Failure(f"API request failed: {e}", FailureKind.NETWORK)

        if status != 200:
            error_body = data.decode("utf-8", errors="replace")
            logger.warning(f"API request failed with status {status}")
            return Failure(f"API request failed with status {status}: {error_body}", FailureKind.NETWORK)

        return Success(data)

    def _response_text(self, data: bytes) -> str | None:
        """Text of the first content block, or None if the shape is wrong."""
        try:
            payload = json.loads(data)
            text = payload["content"][0]["text"]
        except (json.JSONDecodeError, UnicodeDecodeError, KeyError, IndexError, TypeError) as e:
            logger.warning(f"Unexpected API response shape: {e}")
            return None
        if not isinstance(text, str):
            return None
        return text
