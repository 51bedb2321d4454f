"""Environment-driven settings for the intimation generator."""

import os

# LLM provider settings
CEREBRAS_MODEL = os.getenv("CEREBRAS_MODEL", "gpt-oss-120b")

# Whether Gujarati diagnoses are translated to English after extraction
TRANSLATE_DISEASE = os.getenv("TRANSLATE_DISEASE", "true").strip().lower() not in (
    "0",
    "false",
    "no",
)

# Recipient defaults seeded into every new intimation
DEFAULT_TO = os.getenv(
    "DEFAULT_TO",
    "dharmendra.joshi@paramounttpa.com, contact.phs@paramounttpa.com, "
    "claim.intimation@paramounttpa.com",
)
DEFAULT_CC = os.getenv("DEFAULT_CC", "")
DEFAULT_BCC = os.getenv("DEFAULT_BCC", "Mahipatsinh Gohel <mpgohel2016@gmail.com>")

# Addressee block of the email body
TPA_NAME = os.getenv("TPA_NAME", "Paramount TPA")
TPA_CITY = os.getenv("TPA_CITY", "AHMEDABAD")

# Server settings
MAX_SESSIONS = int(os.getenv("MAX_SESSIONS", "500"))
PORT = int(os.getenv("PORT", "8000"))
