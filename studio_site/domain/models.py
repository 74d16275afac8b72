"""
Internal data models for the contact pipeline.

None of these are persisted; they live for a single request (or, for rate
limit entries, for the lifetime of the process).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union


@dataclass
class Submission:
    """Raw contact form submission, after coercing the JSON body"""

    name: str = ""
    email: str = ""
    message: str = ""
    company: str = ""  # honeypot (legacy field name)
    website: str = ""  # honeypot (preferred field name)
    form_started_at: Optional[float] = None  # epoch ms, set when the form rendered

    @property
    def honeypot(self) -> str:
        return self.website or self.company


@dataclass
class ValidatedContact:
    """Trimmed, validated submitter details"""

    name: str
    email: str
    message: str


class SpamClassification(str, Enum):
    BOT = "bot"
    TOO_FAST = "too_fast"
    SUSPICIOUS = "suspicious"
    CLEAN = "clean"


@dataclass
class SpamVerdict:
    classification: SpamClassification
    elapsed_ms: Optional[int] = None

    @property
    def is_suspicious(self) -> bool:
        return self.classification == SpamClassification.SUSPICIOUS


@dataclass
class RateLimitEntry:
    count: int
    reset_at: int  # epoch ms


@dataclass
class RateLimitDecision:
    allowed: bool
    remaining: int
    reset_at: int


@dataclass
class EmailMessage:
    """One outbound email. Built fresh for every send."""

    to: str
    from_: str
    subject: str
    text: str
    html: str
    reply_to: Optional[str] = None

    def to_payload(self, from_: Optional[str] = None) -> Dict[str, Any]:
        """Provider request body, optionally with a substitute sender"""
        return {
            "from": from_ or self.from_,
            "to": [self.to],
            "subject": self.subject,
            "reply_to": self.reply_to,
            "text": self.text,
            "html": self.html,
        }


# Dispatch outcomes. One class per case, each carrying only its own fields.


@dataclass(frozen=True)
class Sent:
    from_used: str
    id: Optional[str] = None

    ok = True

    def debug(self) -> Dict[str, Any]:
        return {"id": self.id, "fromUsed": self.from_used}


@dataclass(frozen=True)
class SentViaFallback:
    from_used: str
    id: Optional[str] = None

    ok = True

    def debug(self) -> Dict[str, Any]:
        return {"id": self.id, "fromUsed": self.from_used, "fallback": True}


@dataclass(frozen=True)
class Skipped:
    reason: str = "missing_api_key"

    ok = True

    def debug(self) -> Dict[str, Any]:
        return {"skipped": self.reason}


@dataclass(frozen=True)
class Failed:
    reason: str

    ok = False

    def debug(self) -> Dict[str, Any]:
        return {"error": self.reason}


DispatchResult = Union[Sent, SentViaFallback, Skipped, Failed]


@dataclass
class ContactOutcome:
    """What the HTTP layer renders for a handled submission"""

    status_code: int = 200
    debug: Optional[Dict[str, Any]] = None

    def body(self) -> Dict[str, Any]:
        content: Dict[str, Any] = {"ok": True}
        if self.debug is not None:
            content["debug"] = self.debug
        return content
