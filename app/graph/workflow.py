"""LangGraph workflow definition for intimation extraction."""

import logging

from langgraph.graph import END, START, StateGraph

from app.errors import ExtractionFailure
from app.graph.nodes.extractor import extractor_node
from app.graph.nodes.translator import translator_node
from app.graph.state import ExtractionState
from app.intimation.records import ClaimRecord

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Graph construction
# ---------------------------------------------------------------------------

graph_builder = StateGraph(ExtractionState)

# Nodes
graph_builder.add_node("extractor", extractor_node)
graph_builder.add_node("translator", translator_node)

# Edges
graph_builder.add_edge(START, "extractor")
graph_builder.add_edge("extractor", "translator")
graph_builder.add_edge("translator", END)

# Compile once at module level
workflow = graph_builder.compile()

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def run_extraction_workflow(raw_text: str) -> ClaimRecord:
    """Execute the extraction graph on a pasted message.

    Args:
        raw_text: Unstructured message pasted by the user.

    Returns:
        The populated claim record.

    Raises:
        ExtractionFailure: If any node fails or the result cannot be
            turned into a record.
    """
    initial_state: ExtractionState = {
        "raw_text": raw_text,
        "extracted": {},
        "disease": "",
    }

    logger.info("Workflow started — chars=%d", len(raw_text))
    try:
        result = workflow.invoke(initial_state)
        record = ClaimRecord.from_extraction({**result["extracted"], "disease": result["disease"]})
    except ExtractionFailure:
        raise
    except Exception as exc:
        logger.exception("Workflow failed")
        raise ExtractionFailure(f"Extraction workflow failed: {exc}") from exc
    logger.info("Workflow completed — insured=%r", record.insured_name)

    return record
