"""Telegram delivery for tracker notices."""

from dataclasses import dataclass

import httpx

from study_tracker.services.notifications import Notifier


@dataclass
class HttpxTelegramNotifier(Notifier):
    """Sends notices to a Telegram chat through the Bot API."""

    bot_token: str
    chat_id: int
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, bot_token: str, chat_id: int) -> "HttpxTelegramNotifier":
        """Create a notifier with a managed httpx session."""
        return cls(
            bot_token=bot_token, chat_id=chat_id, http_client=httpx.AsyncClient()
        )

    async def send(self, title: str, body: str) -> None:
        """Send a notice using Telegram's sendMessage API."""
        url = f"https://api.telegram.org/bot{self.bot_token}/sendMessage"
        payload: dict[str, object] = {
            "chat_id": self.chat_id,
            "text": f"{title}\n{body}",
        }
        response = await self.http_client.post(url, json=payload, timeout=10)
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
