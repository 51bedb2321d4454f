"""Payloads handed to the mail-client and clipboard sinks."""

from typing import NamedTuple
from urllib.parse import quote, unquote

from app.intimation.records import ClaimRecord, RecipientConfig
from app.intimation.templates import generate_body, generate_subject

# Characters left untouched by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


class MailMessage(NamedTuple):
    """A mail-client handoff with subject and body already percent-encoded.

    Recipient lists are carried verbatim; address syntax is the mail
    client's concern.
    """

    to: str
    cc: str
    bcc: str
    subject: str
    body: str

    @property
    def uri(self) -> str:
        return (
            f"mailto:{self.to}?cc={self.cc}&bcc={self.bcc}"
            f"&subject={self.subject}&body={self.body}"
        )


class DecodedMail(NamedTuple):
    """Plain-text view of a ``mailto:`` URI built by :func:`build_mail_message`."""

    to: str
    cc: str
    bcc: str
    subject: str
    body: str


def encode_component(value: str) -> str:
    """Percent-encode a value for use inside a ``mailto:`` query string.

    Space becomes ``%20`` and newline ``%0A``; UTF-8 is used for non-ASCII.
    """
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_mail_message(recipients: RecipientConfig, record: ClaimRecord) -> MailMessage:
    """Assemble the mail-client payload for a record.

    Args:
        recipients: Address lists copied as-is.
        record: Claim rendered through the subject and body templates.

    Returns:
        The message whose :attr:`MailMessage.uri` opens the mail client.
    """
    return MailMessage(
        to=recipients.to,
        cc=recipients.cc,
        bcc=recipients.bcc,
        subject=encode_component(generate_subject(record)),
        body=encode_component(generate_body(record)),
    )


def parse_mail_uri(uri: str) -> DecodedMail:
    """Decode a URI produced by :attr:`MailMessage.uri`.

    Only ``subject`` and ``body`` are percent-decoded, mirroring how they
    were encoded.

    Raises:
        ValueError: If the URI does not use the ``mailto`` scheme.
    """
    scheme, sep, rest = uri.partition(":")
    if not sep or scheme.lower() != "mailto":
        raise ValueError(f"Not a mailto URI: {uri!r}")

    to, _, query = rest.partition("?")
    params: dict[str, str] = {}
    for pair in query.split("&") if query else []:
        key, _, value = pair.partition("=")
        params[key] = value

    return DecodedMail(
        to=to,
        cc=params.get("cc", ""),
        bcc=params.get("bcc", ""),
        subject=unquote(params.get("subject", "")),
        body=unquote(params.get("body", "")),
    )


def build_clipboard_text(record: ClaimRecord) -> str:
    return f"Subject: {generate_subject(record)}\n\n{generate_body(record)}"
