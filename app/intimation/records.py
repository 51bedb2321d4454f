"""Immutable claim and recipient records shared by the session and templates."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app import config

_SNAPSHOT_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    extra="forbid",
)


class ClaimRecord(BaseModel):
    """Structured claim details extracted from a pasted message.

    Attributes:
        policy_no: Policy number, free text.
        insured_name: Name of the policy holder.
        patient_name: Name of the admitted patient, may literally be ``"Self"``.
        patient_relation: Relation of the patient to the insured. Empty or
            ``None`` when the patient is the insured.
        doa: Date of admission as display text.
        disease: Disease or diagnosis.
        mobile: Contact mobile number.
        doctor_hospital: Doctor and hospital details, may span several lines.
    """

    model_config = _SNAPSHOT_CONFIG

    policy_no: str = ""
    insured_name: str = ""
    patient_name: str = ""
    patient_relation: str | None = ""
    doa: str = ""
    disease: str = ""
    mobile: str = ""
    doctor_hospital: str = ""

    @classmethod
    def from_extraction(cls, data: dict[str, Any]) -> "ClaimRecord":
        """Build a record from the camelCase dict returned by the extractor.

        Missing keys and ``null`` values become empty strings and non-string
        scalars are stringified. Unknown keys are ignored.

        Args:
            data: Parsed JSON object from the LLM.

        Returns:
            A fully populated record.
        """
        values: dict[str, str] = {}
        for name, field in cls.model_fields.items():
            val = data.get(field.alias or name)
            if val is None:
                val = ""
            elif not isinstance(val, str):
                val = str(val)
            values[name] = val
        return cls(**values)

    def with_changes(self, **changes: str | None) -> "ClaimRecord":
        """Return a new snapshot with the given fields replaced.

        Explicit ``None`` clears a field to ``""``; ``patient_relation``
        keeps ``None`` as its empty value.

        Raises:
            ValueError: If a field name is not part of the record or a value
                is not a string (``pydantic.ValidationError``).
        """
        _check_fields(type(self), changes)
        cleaned = {
            k: "" if v is None and k != "patient_relation" else v
            for k, v in changes.items()
        }
        return type(self).model_validate({**self.model_dump(), **cleaned})


class RecipientConfig(BaseModel):
    """Address lists for the outgoing email, passed through unvalidated."""

    model_config = _SNAPSHOT_CONFIG

    to: str = ""
    cc: str = ""
    bcc: str = ""

    @classmethod
    def defaults(cls) -> "RecipientConfig":
        return cls(to=config.DEFAULT_TO, cc=config.DEFAULT_CC, bcc=config.DEFAULT_BCC)

    def with_changes(self, **changes: str) -> "RecipientConfig":
        """Return a new snapshot with the given address lists replaced.

        Raises:
            ValueError: If a key is not one of ``to``, ``cc`` or ``bcc``.
        """
        _check_fields(type(self), changes)
        cleaned = {k: "" if v is None else v for k, v in changes.items()}
        return type(self).model_validate({**self.model_dump(), **cleaned})


def _check_fields(model: type[BaseModel], changes: dict[str, Any]) -> None:
    unknown = sorted(set(changes) - set(model.model_fields))
    if unknown:
        raise ValueError(f"Unknown {model.__name__} field(s): {', '.join(unknown)}")
