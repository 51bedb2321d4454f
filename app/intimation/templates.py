"""Email subject and body generation for a claim intimation.

Every function here is pure: the same record always renders the same
strings, and no input can make them fail.
"""

from typing import NamedTuple

from app import config
from app.intimation.records import ClaimRecord

BODY_TEMPLATE = """DEAR SIRS,

{tpa_name}
{tpa_city}.

PLEASE NOTE THIS INTIMATION

INSURED NAME : {insured_name}

POLICY NO. : {policy_no}

PATIENT NAME : {patient}

DOA. : {doa}

DISEASE : {disease}

Mo.no. {mobile}

NAME : {doctor_hospital}"""


class EmailPreview(NamedTuple):
    """Rendered subject and body for the live preview."""

    subject: str
    body: str


def patient_label(patient_name: str, patient_relation: str | None) -> str:
    """Combine the patient's name and relation into one display label.

    Args:
        patient_name: Name of the patient.
        patient_relation: Relation to the insured, empty or ``None`` for self.

    Returns:
        ``"{name} ~ {relation}"`` when a relation other than ``self`` is
        given, otherwise the name unchanged.
    """
    if patient_relation and patient_relation.lower() != "self":
        return f"{patient_name} ~ {patient_relation}"
    return patient_name


def generate_subject(record: ClaimRecord) -> str:
    """Render the subject line.

    An empty patient label leaves its segment blank, so the result then
    contains two consecutive spaces. Downstream consumers rely on that exact
    string.
    """
    label = patient_label(record.patient_name, record.patient_relation)
    patient_display = f"({label})" if label else ""
    return f"INTIMATION OF {record.insured_name} {patient_display} {record.disease}"


def generate_body(
    record: ClaimRecord,
    tpa_name: str | None = None,
    tpa_city: str | None = None,
) -> str:
    """Render the multi-line email body addressed to the TPA.

    Args:
        record: Claim details to substitute verbatim.
        tpa_name: Organisation named in the salutation block.
        tpa_city: Location line of the salutation block.

    Returns:
        The body text with fixed blank-line spacing between sections.
    """
    return BODY_TEMPLATE.format(
        tpa_name=config.TPA_NAME if tpa_name is None else tpa_name,
        tpa_city=config.TPA_CITY if tpa_city is None else tpa_city,
        insured_name=record.insured_name,
        policy_no=record.policy_no,
        patient=patient_label(record.patient_name, record.patient_relation),
        doa=record.doa,
        disease=record.disease,
        mobile=record.mobile,
        doctor_hospital=record.doctor_hospital,
    )


def render_preview(record: ClaimRecord) -> EmailPreview:
    return EmailPreview(subject=generate_subject(record), body=generate_body(record))
