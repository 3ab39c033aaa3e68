"""
prompt_loader.py
================

Load the agent's instructions from ``bubo/prompts.md`` so they can be edited
without touching code.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

_PROMPT_PATH = Path(__file__).parent.parent / "prompts.md"

DEFAULT_INSTRUCTIONS = (
    "You are a powerful data assistant helping with Firebase, Excel, and Google Cloud services."
)


def load_prompt(path: Path = _PROMPT_PATH) -> str:
    """Return the instructions text, or ``DEFAULT_INSTRUCTIONS`` if the file is missing."""
    try:
        text = path.read_text(encoding="utf-8")
        logger.info("System prompt loaded from %s (%d chars)", path, len(text))
        return text
    except FileNotFoundError:
        logger.warning("prompts.md not found at %s, using fallback prompt.", path)
        return DEFAULT_INSTRUCTIONS
