"""Extractor node — turns a pasted message into claim fields."""

import json
import logging
from typing import Any

from app.errors import ExtractionFailure
from app.graph.nodes.llm_client import call_llm
from app.graph.state import ExtractionState

logger = logging.getLogger(__name__)

EXTRACTOR_SYSTEM_PROMPT = """You are an insurance claim intimation assistant. You will receive a message, usually copied from WhatsApp, containing the details of a hospital admission.

The message usually lists, one per line:
Policy Number
Insured Name
Patient Name (or 'Self')
Disease/Diagnosis
Date of Admission (DOA)
Mobile Number
Doctor and Hospital Details

Required JSON output format:
{
  "policyNo": "<string>",
  "insuredName": "<string>",
  "patientName": "<string>",
  "patientRelation": "<string or null>",
  "doa": "<string>",
  "disease": "<string>",
  "mobile": "<string>",
  "doctorHospital": "<string>"
}

Rules:
1. If Patient Name contains a relation (e.g., "Namitaben ~ Wife"), separate the Name ("Namitaben") and Relation ("Wife").
2. If Patient Name is "Self", treat 'Self' as the patient name and leave relation empty or null.
3. Clean up the dates to DD/MM/YYYY format if possible.
4. Capture multi-line hospital details into a single string for 'doctorHospital'.
- Use an empty string for any other field not found in the text.
- Return ONLY the JSON object, no explanation or commentary."""

REQUIRED_FIELDS: list[str] = ["policyNo", "insuredName", "doa", "disease"]


def _parse_extraction(raw: str) -> dict[str, Any]:
    """Parse and check the LLM output for claim extraction.

    Args:
        raw: Raw content returned by the LLM.

    Returns:
        The parsed JSON object.

    Raises:
        ExtractionFailure: If the output is empty, not a JSON object, or
            lacks a required key.
    """
    if not raw:
        raise ExtractionFailure("LLM returned an empty response.")
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ExtractionFailure(f"LLM returned invalid JSON: {exc}") from exc

    if not isinstance(parsed, dict):
        raise ExtractionFailure("LLM returned non-object JSON.")

    missing = [key for key in REQUIRED_FIELDS if key not in parsed]
    if missing:
        raise ExtractionFailure(f"LLM response is missing required field(s): {', '.join(missing)}")
    return parsed


def extract_claim_fields(text: str) -> dict[str, Any]:
    """Extract structured claim fields from an unstructured message via LLM.

    Args:
        text: The pasted message.

    Returns:
        The camelCase field dict produced by the model.

    Raises:
        ExtractionFailure: On any LLM error or unusable output.
    """
    if not text.strip():
        raise ExtractionFailure("Nothing to extract: the message is empty.")

    try:
        raw = call_llm(EXTRACTOR_SYSTEM_PROMPT, text)
    except Exception as exc:
        logger.error("Extractor — LLM call failed: %s", exc)
        raise ExtractionFailure(f"LLM call failed: {exc}") from exc

    try:
        return _parse_extraction(raw)
    except ExtractionFailure as exc:
        logger.warning("Extractor — failed to parse LLM response: %s", exc)
        raise


def extractor_node(state: ExtractionState) -> dict[str, Any]:
    """Populate ``extracted`` from the pasted message.

    Args:
        state: Current graph state holding ``raw_text``.

    Returns:
        A dict with the ``extracted`` and ``disease`` keys to merge into state.
    """
    logger.info("Extractor — processing %d character(s)", len(state["raw_text"]))
    extracted = extract_claim_fields(state["raw_text"])
    logger.info("Extractor — fields=%s", sorted(k for k, v in extracted.items() if v))
    return {"extracted": extracted, "disease": str(extracted.get("disease") or "")}
