"""
OTP email-verification engine.

issue_code()  — dedup-aware issuance of a hashed, 10-minute 6-digit code
verify_code() — classify a submitted code as success / invalid / expired /
                already_used against every stored record for the email

Only SHA-256 hashes are persisted. Record purging is delegated to the TTL
index on ``created_at`` (see repositories.indexes).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from errors import ValidationError
from infrastructure.email.protocol import EmailProvider
from repositories.otp_repository import OTPRepository
from schemas.models.otp import OTP_TYPE_EMAIL, OTPVerificationDoc
from shared.crypto import hash_code
from shared.datetime_utils import ensure_utc, utcnow
from shared.generators import generate_otp_code
from shared.logging import get_logger
from shared.validators import normalize_email

log = get_logger(__name__)

OTP_EXPIRY_SECONDS = 600  # 10 minutes
OTP_RESEND_WINDOW_SECONDS = 120  # 2 minutes

VERIFY_SUCCESS = "success"
VERIFY_INVALID = "invalid"
VERIFY_EXPIRED = "expired"
VERIFY_ALREADY_USED = "already_used"

_FAILURE_MESSAGES = {
    VERIFY_INVALID: "Invalid verification code",
    VERIFY_EXPIRED: "Verification code has expired",
    VERIFY_ALREADY_USED: "Verification code has already been used",
}
_NO_CODE_SENT_MESSAGE = "No verification code was sent to this email"


@dataclass(frozen=True)
class IssueResult:
    email: str
    dedup: bool

    @property
    def message(self) -> str:
        if self.dedup:
            return (
                "OTP already sent. Please check your email or wait before "
                "requesting a new code."
            )
        return "OTP sent successfully"


@dataclass(frozen=True)
class VerificationResult:
    outcome: str
    message: str

    @property
    def ok(self) -> bool:
        return self.outcome == VERIFY_SUCCESS

    def raise_for_failure(self) -> None:
        """Raise a 400 ValidationError carrying the failure reason, if any."""
        if not self.ok:
            raise ValidationError(
                self.message, field="otp", details={"reason": self.outcome}
            )


class OTPService:
    def __init__(
        self,
        otp_repo: OTPRepository,
        email_provider: EmailProvider,
        *,
        expiry_seconds: int = OTP_EXPIRY_SECONDS,
        resend_window_seconds: int = OTP_RESEND_WINDOW_SECONDS,
    ) -> None:
        self._otps = otp_repo
        self._email = email_provider
        self._expiry = timedelta(seconds=expiry_seconds)
        self._resend_window = timedelta(seconds=resend_window_seconds)

    async def issue_code(self, email: str) -> IssueResult:
        email = normalize_email(email)
        now = utcnow()
        recent = await self._otps.find_recent_live(
            email, now=now, created_after=now - self._resend_window
        )
        if recent is not None:
            log.info("otp_issue_deduplicated", email=email, record_id=str(recent.id))
            return IssueResult(email=email, dedup=True)

        code = generate_otp_code()
        record = OTPVerificationDoc(
            email=email,
            otp_hash=hash_code(code),
            expires_at=now + self._expiry,
            type=OTP_TYPE_EMAIL,
            created_at=now,
        )
        record = await self._otps.insert(record)
        log.info("otp_issued", email=email, record_id=str(record.id))

        sent = await self._email.send_otp_email(email, code)
        if not sent:
            log.warning("otp_email_send_failed", email=email, record_id=str(record.id))

        return IssueResult(email=email, dedup=False)

    async def verify_code(self, email: str, code: str) -> VerificationResult:
        """Check *code* against every stored record for *email*.

        Precedence: the first unexpired, unverified match succeeds. Without
        one, a previously verified match reports already_used, otherwise an
        expired match reports expired, otherwise the code is invalid. A
        consumed code therefore keeps reporting already_used on every retry.
        """
        email = normalize_email(email)
        records = await self._otps.list_for_email(email)
        if not records:
            log.warning("otp_verification_failed", email=email, reason="no_records")
            return VerificationResult(VERIFY_INVALID, _NO_CODE_SENT_MESSAGE)

        submitted_hash = hash_code(code)
        now = utcnow()
        expired_found = False
        verified_found = False

        for record in records:
            if record.otp_hash != submitted_hash:
                continue
            if record.verified:
                verified_found = True
            elif ensure_utc(record.expires_at) < now:
                expired_found = True
            elif await self._otps.mark_verified(record.id):
                log.info("otp_verified", email=email, record_id=str(record.id))
                return VerificationResult(VERIFY_SUCCESS, "Email verified successfully")
            else:
                # A concurrent request consumed this record between read and write
                verified_found = True

        if verified_found:
            outcome = VERIFY_ALREADY_USED
        elif expired_found:
            outcome = VERIFY_EXPIRED
        else:
            outcome = VERIFY_INVALID

        log.warning("otp_verification_failed", email=email, reason=outcome)
        return VerificationResult(outcome, _FAILURE_MESSAGES[outcome])
