"""Two-screen intimation flow modelled as immutable view-state snapshots.

Every transition takes the current :class:`ViewState` and returns a new
one. Transitions that the current state does not allow raise
:class:`~app.errors.InvalidTransition` and leave the caller's snapshot
untouched.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from app.errors import InvalidTransition
from app.intimation.records import ClaimRecord, RecipientConfig

EXTRACTION_ERROR_MESSAGE = "Failed to process the text. Please try again or fill manually."


class Step(str, Enum):
    """Screen currently shown to the user."""

    INPUT = "INPUT"
    REVIEW = "REVIEW"


@dataclass(frozen=True)
class Idle:
    tag: str = field(default="idle", init=False)


@dataclass(frozen=True)
class Pending:
    tag: str = field(default="pending", init=False)


@dataclass(frozen=True)
class Failed:
    reason: str
    tag: str = field(default="failed", init=False)


@dataclass(frozen=True)
class Succeeded:
    tag: str = field(default="succeeded", init=False)


RequestState = Idle | Pending | Failed | Succeeded


@dataclass(frozen=True)
class ViewState:
    """Everything the UI renders, as one owned snapshot.

    Attributes:
        step: Which screen is active.
        raw_text: Message pasted on the input screen.
        record: Claim details under review.
        recipients: Address lists for the outgoing email.
        request: State of the extraction request.
        error: User-facing message for the last failure, if any.
    """

    step: Step = Step.INPUT
    raw_text: str = ""
    record: ClaimRecord = field(default_factory=ClaimRecord)
    recipients: RecipientConfig = field(default_factory=RecipientConfig.defaults)
    request: RequestState = field(default_factory=Idle)
    error: str | None = None

    @property
    def can_generate(self) -> bool:
        return (
            self.step is Step.INPUT
            and bool(self.raw_text.strip())
            and not isinstance(self.request, Pending)
        )


def initial_state() -> ViewState:
    return ViewState()


def set_raw_text(state: ViewState, text: str) -> ViewState:
    if state.step is not Step.INPUT:
        raise InvalidTransition("Text can only be pasted on the input screen.")
    if isinstance(state.request, Pending):
        raise InvalidTransition("Cannot change the text while an extraction is in progress.")
    return replace(state, raw_text=text)


def begin_extraction(state: ViewState) -> ViewState:
    """Mark an extraction as outstanding.

    Raises:
        InvalidTransition: If not on the input screen, an extraction is
            already pending, or there is no text to extract from.
    """
    if state.step is not Step.INPUT:
        raise InvalidTransition("Extraction can only start from the input screen.")
    if isinstance(state.request, Pending):
        raise InvalidTransition("An extraction is already in progress.")
    if not state.raw_text.strip():
        raise InvalidTransition("Paste a message before generating.")
    return replace(state, request=Pending(), error=None)


def complete_extraction(state: ViewState, record: ClaimRecord) -> ViewState:
    """Replace the record wholesale and move to the review screen."""
    if not isinstance(state.request, Pending):
        raise InvalidTransition("No extraction is in progress.")
    return replace(state, step=Step.REVIEW, record=record, request=Succeeded(), error=None)


def fail_extraction(state: ViewState, reason: str) -> ViewState:
    """Stay on the input screen with the pasted text and record untouched."""
    if not isinstance(state.request, Pending):
        raise InvalidTransition("No extraction is in progress.")
    return replace(state, request=Failed(reason=reason), error=EXTRACTION_ERROR_MESSAGE)


def start_manual_entry(state: ViewState) -> ViewState:
    """Skip extraction and review the current record as-is."""
    if state.step is not Step.INPUT:
        raise InvalidTransition("Manual entry starts from the input screen.")
    if isinstance(state.request, Pending):
        raise InvalidTransition("An extraction is already in progress.")
    return replace(state, step=Step.REVIEW, error=None)


def edit_record(state: ViewState, **changes: str | None) -> ViewState:
    if state.step is not Step.REVIEW:
        raise InvalidTransition("Claim details can only be edited on the review screen.")
    return replace(state, record=state.record.with_changes(**changes))


def edit_recipients(state: ViewState, **changes: str) -> ViewState:
    if state.step is not Step.REVIEW:
        raise InvalidTransition("Recipients can only be edited on the review screen.")
    return replace(state, recipients=state.recipients.with_changes(**changes))


def require_review(state: ViewState) -> None:
    if state.step is not Step.REVIEW:
        raise InvalidTransition("Generate or enter the claim details first.")


def reset(state: ViewState) -> ViewState:
    """Discard the record, recipients and pasted text and return to input."""
    if isinstance(state.request, Pending):
        raise InvalidTransition("Cannot reset while an extraction is in progress.")
    return initial_state()
