"""
Prompt templates sent to the summary model.

Each template is a markdown file in commitpilot/prompts/. The system prompt
is sent as-is, so its JSON example keeps single braces. The user turn goes
through render_prompt, which fills {diff} with str.format(); braces inside
the diff itself are never interpreted.

Leading <!-- ... --> notes are for maintainers and never reach the model.
"""

import logging
import re
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)

__all__ = ["PromptError", "load_prompt", "render_prompt", "clear_cache", "PROMPTS_DIR"]

_HTML_COMMENT_PATTERN = re.compile(r'<!--.*?-->\s*', re.DOTALL)

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"


class PromptError(Exception):
    """A template is missing from the package or a placeholder was not supplied."""
    pass


@lru_cache(maxsize=8)
def load_prompt(name: str) -> str:
    """
    Template text for name (e.g. 'summary_system'), notes and outer
    whitespace removed. Read once per process.
    """
    prompt_path = PROMPTS_DIR / f"{name}.md"
    if not prompt_path.exists():
        raise PromptError(f"Prompt template '{name}' not found at {prompt_path}")

    logger.debug(f"Loading prompt template {prompt_path.name}")
    content = _HTML_COMMENT_PATTERN.sub('', prompt_path.read_text())
    return content.strip()


def render_prompt(name: str, **values) -> str:
    """Fill a template's placeholders, e.g. render_prompt('summary_user', diff=text)."""
    template = load_prompt(name)
    try:
        return template.format(**values)
    except KeyError as e:
        raise PromptError(
            f"Missing required variable {e} in prompt '{name}' (got: {', '.join(values) or 'none'})"
        ) from e


def clear_cache():
    """Forget loaded templates so edited files are read again."""
    load_prompt.cache_clear()
