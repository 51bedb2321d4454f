"""Shared state definition for the intimation extraction workflow."""

from typing import Any, TypedDict


class ExtractionState(TypedDict):
    """Typed state passed through every node in the extraction graph.

    Attributes:
        raw_text: The unstructured message pasted by the user.
        extracted: camelCase claim fields as returned by the extractor node.
        disease: Disease after optional translation into English.
    """

    raw_text: str
    extracted: dict[str, Any]
    disease: str
