"""API route definitions for the intimation generator."""

import logging
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, HTTPException, Response
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.errors import ExtractionFailure, InvalidTransition
from app.graph.workflow import run_extraction_workflow
from app.session.controller import IntimationSession, SessionStore
from app.session.state import Step

logger = logging.getLogger(__name__)

router = APIRouter()

sessions = SessionStore()


class PastedText(BaseModel):
    text: str


class RecordChanges(BaseModel):
    """Partial claim edit; only the keys present in the request are applied."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    policy_no: str | None = None
    insured_name: str | None = None
    patient_name: str | None = None
    patient_relation: str | None = None
    doa: str | None = None
    disease: str | None = None
    mobile: str | None = None
    doctor_hospital: str | None = None


class RecipientChanges(BaseModel):
    model_config = ConfigDict(extra="forbid")

    to: str | None = None
    cc: str | None = None
    bcc: str | None = None


def _get_session(session_id: str) -> IntimationSession:
    """Fetch a live session.

    Raises:
        HTTPException: If the session does not exist.
    """
    try:
        return sessions.get(session_id)
    except KeyError:
        logger.warning("Unknown session_id: %s", session_id)
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found.") from None


def _provided(changes: BaseModel) -> dict[str, str]:
    """Keys present in a partial edit, with explicit nulls cleared to ''."""
    return {k: v if v is not None else "" for k, v in changes.model_dump(exclude_unset=True).items()}


def _conflict(exc: InvalidTransition) -> HTTPException:
    logger.warning("Rejected action: %s", exc)
    return HTTPException(status_code=409, detail=str(exc))


def _snapshot(session: IntimationSession) -> dict[str, Any]:
    """Serialise the session's current view state for the client."""
    state = session.state
    return {
        "session_id": session.session_id,
        "step": state.step.value,
        "raw_text": state.raw_text,
        "record": state.record.model_dump(by_alias=True),
        "recipients": state.recipients.model_dump(),
        "request": asdict(state.request),
        "error": state.error,
        "can_generate": state.can_generate,
    }


@router.post("/api/sessions", status_code=201)
async def create_session() -> dict[str, Any]:
    """Start a new intimation on the input screen with default recipients."""
    return _snapshot(sessions.create())


@router.get("/api/sessions/{session_id}")
async def get_session(session_id: str) -> dict[str, Any]:
    return _snapshot(_get_session(session_id))


@router.delete("/api/sessions/{session_id}", status_code=204)
async def delete_session(session_id: str) -> Response:
    _get_session(session_id)
    sessions.discard(session_id)
    return Response(status_code=204)


@router.put("/api/sessions/{session_id}/text")
async def set_text(session_id: str, payload: PastedText) -> dict[str, Any]:
    session = _get_session(session_id)
    try:
        session.set_text(payload.text)
    except InvalidTransition as exc:
        raise _conflict(exc) from exc
    return _snapshot(session)


@router.post("/api/sessions/{session_id}/generate")
async def generate(session_id: str) -> dict[str, Any]:
    """Extract claim details from the pasted text.

    Extraction failures are not HTTP errors: the returned snapshot stays on
    the input screen with ``request.tag == "failed"`` and an ``error``
    message, so the user can retry or fill the form manually.
    """
    session = _get_session(session_id)
    if session.state.step is Step.INPUT and not session.state.raw_text.strip():
        logger.warning("Session %s — generate with empty text", session_id)
        raise HTTPException(status_code=400, detail="Paste a message before generating.")

    try:
        text = session.begin_generate()
    except InvalidTransition as exc:
        raise _conflict(exc) from exc

    try:
        record = await run_in_threadpool(run_extraction_workflow, text)
    except ExtractionFailure as exc:
        session.fail_generate(exc)
    except Exception as exc:
        logger.exception("Session %s — extraction crashed", session_id)
        session.fail_generate(exc)
        raise HTTPException(status_code=500, detail="Extraction failed unexpectedly.") from exc
    else:
        session.complete_generate(record)
    return _snapshot(session)


@router.post("/api/sessions/{session_id}/manual")
async def manual_entry(session_id: str) -> dict[str, Any]:
    session = _get_session(session_id)
    try:
        session.start_manual_entry()
    except InvalidTransition as exc:
        raise _conflict(exc) from exc
    return _snapshot(session)


@router.patch("/api/sessions/{session_id}/record")
async def edit_record(session_id: str, changes: RecordChanges) -> dict[str, Any]:
    session = _get_session(session_id)
    updates = _provided(changes)
    try:
        session.edit_record(**updates)
    except InvalidTransition as exc:
        raise _conflict(exc) from exc
    return _snapshot(session)


@router.patch("/api/sessions/{session_id}/recipients")
async def edit_recipients(session_id: str, changes: RecipientChanges) -> dict[str, Any]:
    session = _get_session(session_id)
    updates = _provided(changes)
    try:
        session.edit_recipients(**updates)
    except InvalidTransition as exc:
        raise _conflict(exc) from exc
    return _snapshot(session)


@router.get("/api/sessions/{session_id}/preview")
async def preview(session_id: str) -> dict[str, str]:
    """Live subject/body preview of the current record."""
    subject, body = _get_session(session_id).preview()
    return {"subject": subject, "body": body}


@router.post("/api/sessions/{session_id}/copy")
async def copy_text(session_id: str) -> dict[str, str]:
    """Return the plain text the client places on the system clipboard."""
    session = _get_session(session_id)
    try:
        text = session.copy()
    except InvalidTransition as exc:
        raise _conflict(exc) from exc
    return {"text": text}


@router.post("/api/sessions/{session_id}/send")
async def send(session_id: str) -> dict[str, str]:
    """Return the ``mailto:`` handoff for the client's mail application."""
    session = _get_session(session_id)
    try:
        message = session.send()
    except InvalidTransition as exc:
        raise _conflict(exc) from exc
    logger.info("Session %s — mailto prepared for to=%s", session_id, message.to)
    return {"uri": message.uri, **message._asdict()}


@router.post("/api/sessions/{session_id}/reset")
async def reset(session_id: str) -> dict[str, Any]:
    session = _get_session(session_id)
    try:
        session.reset()
    except InvalidTransition as exc:
        raise _conflict(exc) from exc
    return _snapshot(session)


@router.get("/health", status_code=200)
async def health_check() -> dict[str, str]:
    """Liveness / readiness health check endpoint.

    Returns:
        A dict with the current service status.
    """
    return {"status": "ok"}
