"""
Spam heuristic: honeypot plus form fill timing.

Autofill and password managers sometimes populate hidden fields for real
users, so a filled honeypot alone does not reject a submission:

- honeypot filled and submitted instantly  -> BOT (pretend success, do nothing)
- submitted instantly, honeypot empty      -> TOO_FAST (429)
- honeypot filled, timing looks human      -> SUSPICIOUS (deliver flagged, no confirmation)
- otherwise                                -> CLEAN
"""

from typing import Optional

from studio_site.domain.models import SpamClassification, SpamVerdict

DEFAULT_MIN_FILL_MS = 2500


def classify_submission(
    honeypot: str,
    form_started_at: Optional[float],
    now_ms: int,
    min_fill_ms: int = DEFAULT_MIN_FILL_MS,
) -> SpamVerdict:
    honeypot_tripped = len(honeypot) > 0

    elapsed_ms = None
    if form_started_at is not None:
        elapsed_ms = int(now_ms - form_started_at)
        if elapsed_ms < min_fill_ms:
            if honeypot_tripped:
                return SpamVerdict(SpamClassification.BOT, elapsed_ms)
            return SpamVerdict(SpamClassification.TOO_FAST, elapsed_ms)

    if honeypot_tripped:
        return SpamVerdict(SpamClassification.SUSPICIOUS, elapsed_ms)
    return SpamVerdict(SpamClassification.CLEAN, elapsed_ms)
