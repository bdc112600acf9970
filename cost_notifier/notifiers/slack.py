import logging
from typing import Any, Dict, Optional, Protocol

import requests

from ..errors import SendError
from ..schemas import NotificationMessage

LOG = logging.getLogger(__name__)

DEFAULT_COLOR = "#36a64f"


class SendMessage(Protocol):
    def send(self, message: NotificationMessage) -> None:
        ...


def build_payload(message: NotificationMessage, color: str = DEFAULT_COLOR) -> Dict[str, Any]:
    """Slack attachment with the header as pretext and the service lines as text."""
    return {
        "attachments": [
            {
                "color": color,
                "pretext": message.header,
                "text": message.body,
            }
        ]
    }


class SlackNotifier:
    def __init__(self, webhook_url: str, timeout: float = 10.0,
                 session: Optional[requests.Session] = None, color: str = DEFAULT_COLOR):
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.color = color

    def send(self, message: NotificationMessage) -> None:
        try:
            resp = self.session.post(
                self.webhook_url,
                json=build_payload(message, self.color),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SendError(f"Slack notification failed: {type(e).__name__}") from e
        # the webhook URL is a credential, keep it out of error messages
        if not resp.ok:
            raise SendError(f"Slack notification failed: HTTP {resp.status_code} {resp.text[:200]}")
        LOG.info("Slack notification sent")
