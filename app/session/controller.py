"""Intimation sessions: own the current view state and run user actions."""

import logging
import uuid
from collections import OrderedDict
from collections.abc import Callable

from app import config
from app.errors import ClipboardFailure, ExtractionFailure
from app.intimation.payloads import MailMessage, build_clipboard_text, build_mail_message
from app.intimation.records import ClaimRecord
from app.intimation.templates import EmailPreview, render_preview
from app.session import state as transitions
from app.session.state import ViewState

logger = logging.getLogger(__name__)

Extractor = Callable[[str], ClaimRecord]
TextSink = Callable[[str], object]


class IntimationSession:
    """One user's pass through the paste → review → send flow.

    The session only ever swaps whole :class:`ViewState` snapshots, so a
    reader of :attr:`state` never sees a half-applied edit.
    """

    def __init__(self, session_id: str | None = None) -> None:
        self.session_id = session_id or uuid.uuid4().hex
        self.state: ViewState = transitions.initial_state()

    def set_text(self, text: str) -> ViewState:
        self.state = transitions.set_raw_text(self.state, text)
        return self.state

    def begin_generate(self) -> str:
        """Mark the extraction as pending and return the text to extract.

        Raises:
            InvalidTransition: If an extraction may not start now.
        """
        self.state = transitions.begin_extraction(self.state)
        return self.state.raw_text

    def complete_generate(self, record: ClaimRecord) -> ViewState:
        self.state = transitions.complete_extraction(self.state, record)
        logger.info("Session %s — extraction succeeded", self.session_id)
        return self.state

    def fail_generate(self, exc: Exception) -> ViewState:
        self.state = transitions.fail_extraction(self.state, str(exc))
        logger.warning("Session %s — extraction failed: %s", self.session_id, exc)
        return self.state

    def generate(self, extract: Extractor) -> ViewState:
        """Run one extraction to completion or failure.

        Args:
            extract: Collaborator turning pasted text into a record.

        Returns:
            The resulting snapshot. Extraction failures are recorded in the
            state rather than raised.

        Raises:
            Exception: Any other error from ``extract``, re-raised after the
                request has been marked failed so the session stays usable.
        """
        text = self.begin_generate()
        try:
            record = extract(text)
        except ExtractionFailure as exc:
            return self.fail_generate(exc)
        except Exception as exc:
            self.fail_generate(exc)
            raise
        return self.complete_generate(record)

    def start_manual_entry(self) -> ViewState:
        self.state = transitions.start_manual_entry(self.state)
        return self.state

    def edit_record(self, **changes: str | None) -> ViewState:
        self.state = transitions.edit_record(self.state, **changes)
        return self.state

    def edit_recipients(self, **changes: str) -> ViewState:
        self.state = transitions.edit_recipients(self.state, **changes)
        return self.state

    def preview(self) -> EmailPreview:
        return render_preview(self.state.record)

    def copy(self, sink: TextSink | None = None) -> str:
        """Place the subject and body on the clipboard sink.

        Raises:
            InvalidTransition: If not on the review screen.
            ClipboardFailure: If the sink raises. The state is unchanged.
        """
        transitions.require_review(self.state)
        text = build_clipboard_text(self.state.record)
        if sink is None:
            return text
        try:
            sink(text)
        except Exception as exc:
            logger.error("Session %s — clipboard sink failed: %s", self.session_id, exc)
            raise ClipboardFailure("Could not copy the email to the clipboard.") from exc
        return text

    def send(self, sink: TextSink | None = None) -> MailMessage:
        """Build the mail-client handoff and pass its URI to ``sink``.

        Raises:
            InvalidTransition: If not on the review screen.
        """
        transitions.require_review(self.state)
        message = build_mail_message(self.state.recipients, self.state.record)
        if sink is not None:
            sink(message.uri)
        return message

    def reset(self) -> ViewState:
        self.state = transitions.reset(self.state)
        return self.state


class SessionStore:
    """In-memory registry of live sessions, discarded with the process.

    Holds at most ``max_sessions`` sessions; creating one more evicts the
    least recently used.
    """

    def __init__(self, max_sessions: int | None = None) -> None:
        self.max_sessions = max_sessions or config.MAX_SESSIONS
        self._sessions: OrderedDict[str, IntimationSession] = OrderedDict()

    def create(self) -> IntimationSession:
        session = IntimationSession()
        self._sessions[session.session_id] = session
        logger.info("Session %s — created", session.session_id)
        while len(self._sessions) > self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("Session %s — evicted (limit %d)", evicted, self.max_sessions)
        return session

    def get(self, session_id: str) -> IntimationSession:
        """Look up a session.

        Raises:
            KeyError: If no such session exists.
        """
        session = self._sessions[session_id]
        self._sessions.move_to_end(session_id)
        return session

    def discard(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
