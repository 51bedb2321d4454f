"""Translator node — renders a Gujarati diagnosis in English."""

import logging
import re
from typing import Any

from app import config
from app.graph.nodes.llm_client import call_llm
from app.graph.state import ExtractionState

logger = logging.getLogger(__name__)

GUJARATI_RANGE = re.compile(r"[\u0A80-\u0AFF]")

TRANSLATOR_SYSTEM_PROMPT = """Translate the following Gujarati disease/diagnosis into concise English (medical term).
Return ONLY the English translation, with no quotes and no explanation."""

_SURROUNDING_QUOTES = re.compile(r"^['\"]|['\"]$")


def translate_disease_to_english(disease_text: str) -> str:
    """Translate a diagnosis into English when it is written in Gujarati.

    Args:
        disease_text: The diagnosis as extracted.

    Returns:
        The English translation with surrounding quotes removed. Text that
        contains no Gujarati script is returned trimmed but otherwise
        untouched, and the trimmed original is kept when the model gives an
        empty answer or fails.
    """
    trimmed = (disease_text or "").strip()
    if not trimmed:
        return ""

    if not GUJARATI_RANGE.search(trimmed):
        return trimmed

    try:
        out = call_llm(TRANSLATOR_SYSTEM_PROMPT, f'Text:\n"""\n{trimmed}\n"""')
    except Exception as exc:
        logger.warning("Translator — LLM call failed, keeping original: %s", exc)
        return trimmed

    if not out:
        logger.warning("Translator — empty translation, keeping original")
        return trimmed

    return _SURROUNDING_QUOTES.sub("", out).strip()


def translator_node(state: ExtractionState) -> dict[str, Any]:
    """Replace the extracted disease with its English translation.

    Args:
        state: Current graph state with ``disease`` populated.

    Returns:
        A dict with the ``disease`` key to merge into state.
    """
    if not config.TRANSLATE_DISEASE:
        return {"disease": state["disease"]}

    disease = translate_disease_to_english(state["disease"])
    if disease != state["disease"]:
        logger.info("Translator — disease %r → %r", state["disease"], disease)
    return {"disease": disease}
