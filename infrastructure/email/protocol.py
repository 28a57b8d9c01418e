"""EmailProvider protocol — services depend on this, not the concrete implementation."""

from typing import Optional, Protocol


class EmailProvider(Protocol):
    async def send_otp_email(self, email: str, otp_code: str) -> bool: ...

    async def send_welcome_email(self, email: str, name: Optional[str]) -> bool: ...
