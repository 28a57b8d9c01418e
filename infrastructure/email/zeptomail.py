"""ZeptoMail implementation of EmailProvider.

Sends transactional mail through the ZeptoMail HTTP API using the shared
async HttpClient. Bodies are rendered from Jinja2 templates under
templates/emails.
"""

import os
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from config import EmailSettings
from infrastructure.http_client import HttpClient
from shared.logging import get_logger

log = get_logger(__name__)

_ZEPTO_API_URL = "https://api.zeptomail.com/v1.1/email"
_DEFAULT_TEMPLATE_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(__file__))),
    "templates",
    "emails",
)


class ZeptoMailProvider:
    def __init__(
        self,
        settings: EmailSettings,
        http_client: HttpClient,
        app_url: str,
        app_name: str = "Cause Totes",
        otp_ttl_minutes: int = 10,
        template_dir: str = _DEFAULT_TEMPLATE_DIR,
    ) -> None:
        self._settings = settings
        self._http = http_client
        self._app_url = app_url
        self._app_name = app_name
        self._otp_ttl_minutes = otp_ttl_minutes
        self._jinja = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
        )

    async def _send(
        self,
        to_email: str,
        to_name: Optional[str],
        subject: str,
        html_body: str,
        text_body: Optional[str] = None,
    ) -> bool:
        if not self._settings.zepto_api_token:
            log.error("zepto_mail_send_failed", reason="api_credentials_missing")
            return False

        payload: dict = {
            "from": {
                "address": self._settings.zepto_from_email,
                "name": self._settings.zepto_from_name,
            },
            "to": [
                {
                    "email_address": {
                        "address": to_email,
                        "name": to_name or to_email,
                    }
                }
            ],
            "subject": subject,
            "htmlbody": html_body,
        }
        if text_body:
            payload["textbody"] = text_body

        auth_header = self._settings.zepto_api_token
        if not auth_header.startswith("Zoho-enczapikey "):
            auth_header = f"Zoho-enczapikey {auth_header}"

        headers = {"Authorization": auth_header, "Content-Type": "application/json"}

        try:
            response = await self._http.post(
                _ZEPTO_API_URL, json=payload, headers=headers
            )
        except Exception as e:
            log.error(
                "email_send_error",
                to_email=to_email,
                subject=subject,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

        if response.status_code in (200, 201, 202):
            log.info("email_sent_success", to_email=to_email, subject=subject)
            return True
        log.error(
            "email_send_rejected",
            to_email=to_email,
            subject=subject,
            status_code=response.status_code,
            response=response.text[:200],
        )
        return False

    async def send_otp_email(self, email: str, otp_code: str) -> bool:
        subject = f"Your verification code - {self._app_name}"
        template = self._jinja.get_template("otp.html")
        html_body = template.render(
            otp_code=otp_code,
            app_name=self._app_name,
            app_url=self._app_url,
            ttl_minutes=self._otp_ttl_minutes,
        )
        text_body = (
            f"Verify your email - {self._app_name}\n\n"
            f"Your verification code is: {otp_code}\n\n"
            f"This code expires in {self._otp_ttl_minutes} minutes. "
            f"If you did not request it, you can ignore this email.\n"
        )
        return await self._send(email, None, subject, html_body, text_body)

    async def send_welcome_email(self, email: str, name: Optional[str]) -> bool:
        subject = f"Welcome to {self._app_name}!"
        template = self._jinja.get_template("welcome.html")
        html_body = template.render(
            name=name, app_name=self._app_name, app_url=self._app_url
        )
        text_body = (
            f"Welcome to {self._app_name}{f', {name}' if name else ''}!\n\n"
            f"Browse causes and claim a tote: {self._app_url}/causes\n"
        )
        return await self._send(email, name, subject, html_body, text_body)
