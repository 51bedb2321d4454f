"""Unit tests for the mail-client and clipboard payloads."""

import pytest

from app.intimation.payloads import (
    build_clipboard_text,
    build_mail_message,
    encode_component,
    parse_mail_uri,
)
from app.intimation.records import ClaimRecord, RecipientConfig
from app.intimation.templates import generate_body, generate_subject


def _record() -> ClaimRecord:
    return ClaimRecord(
        policy_no="P/2024/001",
        insured_name="Rajesh Shah",
        patient_name="Namitaben",
        patient_relation="Wife",
        doa="05/03/2024",
        disease="DENGUE & FEVER",
        mobile="+91 98250 12345",
        doctor_hospital="Dr. Mehta\nSterling Hospital, Ahmedabad",
    )


def _recipients() -> RecipientConfig:
    return RecipientConfig(
        to="a@tpa.com, b@tpa.com",
        cc="",
        bcc="Mahipatsinh Gohel <mpgohel2016@gmail.com>",
    )


# ---------------------------------------------------------------------------
# encode_component
# ---------------------------------------------------------------------------

class TestEncodeComponent:

    def test_space_and_newline(self) -> None:
        assert encode_component("a b\nc") == "a%20b%0Ac"

    @pytest.mark.parametrize("char,encoded", [
        ("&", "%26"),
        ("=", "%3D"),
        ("?", "%3F"),
        ("/", "%2F"),
        ("~", "~"),
        ("(", "("),
        (")", ")"),
        ("*", "*"),
        ("!", "!"),
        ("'", "'"),
    ])
    def test_matches_uri_component_rules(self, char: str, encoded: str) -> None:
        assert encode_component(char) == encoded

    def test_non_ascii_is_utf8(self) -> None:
        assert encode_component("તાવ") == "%E0%AA%A4%E0%AA%BE%E0%AA%B5"


# ---------------------------------------------------------------------------
# build_mail_message / parse_mail_uri
# ---------------------------------------------------------------------------

class TestMailMessage:

    def test_recipients_passed_verbatim(self) -> None:
        message = build_mail_message(_recipients(), _record())
        assert message.to == "a@tpa.com, b@tpa.com"
        assert message.cc == ""
        assert message.bcc == "Mahipatsinh Gohel <mpgohel2016@gmail.com>"

    def test_malformed_addresses_not_rejected(self) -> None:
        recipients = RecipientConfig(to="not an address", cc=";;", bcc="")
        message = build_mail_message(recipients, _record())
        assert message.uri.startswith("mailto:not an address?cc=;;&bcc=&subject=")

    def test_subject_and_body_encoded(self) -> None:
        message = build_mail_message(_recipients(), _record())
        assert " " not in message.subject
        assert "\n" not in message.body
        assert "%0A" in message.body
        assert "DENGUE%20%26%20FEVER" in message.subject

    def test_uri_layout(self) -> None:
        message = build_mail_message(_recipients(), _record())
        assert message.uri == (
            f"mailto:{message.to}?cc={message.cc}&bcc={message.bcc}"
            f"&subject={message.subject}&body={message.body}"
        )

    def test_round_trip_restores_subject_and_body(self) -> None:
        record = _record()
        decoded = parse_mail_uri(build_mail_message(_recipients(), record).uri)
        assert decoded.subject == generate_subject(record)
        assert decoded.body == generate_body(record)
        assert decoded.to == "a@tpa.com, b@tpa.com"
        assert decoded.bcc == "Mahipatsinh Gohel <mpgohel2016@gmail.com>"

    def test_round_trip_empty_record(self) -> None:
        decoded = parse_mail_uri(build_mail_message(_recipients(), ClaimRecord()).uri)
        assert decoded.subject == "INTIMATION OF   "
        assert decoded.body == generate_body(ClaimRecord())

    def test_parse_rejects_other_schemes(self) -> None:
        with pytest.raises(ValueError, match="mailto"):
            parse_mail_uri("https://example.com/?subject=x")


# ---------------------------------------------------------------------------
# build_clipboard_text
# ---------------------------------------------------------------------------

def test_clipboard_text_layout() -> None:
    record = _record()
    assert build_clipboard_text(record) == (
        f"Subject: {generate_subject(record)}\n\n{generate_body(record)}"
    )


def test_clipboard_text_is_not_encoded() -> None:
    text = build_clipboard_text(_record())
    assert text.startswith("Subject: INTIMATION OF Rajesh Shah (Namitaben ~ Wife) DENGUE & FEVER\n\n")
    assert "Dr. Mehta\nSterling Hospital, Ahmedabad" in text
