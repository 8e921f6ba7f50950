"""
Сервис отправки писем через Resend API
"""
import logging
from typing import Optional

import requests

from app.core.config import settings

logger = logging.getLogger(__name__)


class EmailNotConfiguredError(RuntimeError):
    pass


class EmailService:
    """Transactional email over the Resend HTTP API"""

    BASE_URL = "https://api.resend.com"

    def __init__(
        self,
        api_key: Optional[str] = None,
        sender: Optional[str] = None,
        timeout: int = 10,
    ):
        self.api_key = settings.resend_api_key if api_key is None else api_key
        self.sender = settings.sender_email if sender is None else sender
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def send(self, to: list[str], subject: str, html: str) -> Optional[str]:
        """
        Отправка письма.

        Returns:
            Resend message id (may be None if the API omits it)
        """
        if not self.is_configured:
            raise EmailNotConfiguredError("Email service not configured")

        logger.info(f"Sending email '{subject}' to {len(to)} recipient(s)")

        try:
            response = requests.post(
                f"{self.BASE_URL}/emails",
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={
                    "from": self.sender,
                    "to": to,
                    "subject": subject,
                    "html": html,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            logger.error(f"HTTP error: {e}")
            logger.error(f"Response body: {e.response.text if e.response is not None else 'No response'}")
            raise
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to send email: {e}")
            raise

        message_id = response.json().get("id")
        logger.info(f"Email sent, id={message_id}")
        return message_id
