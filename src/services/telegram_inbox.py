"""
Telegram webhook ingestion and file proxying.
"""
import logging
import secrets
from typing import Any, Dict, Optional, Tuple

import httpx
from telegram import Bot, Message, Update
from telegram.error import BadRequest

from core.entities import PostKind, StudioPost
from processing.text import first_line

logger = logging.getLogger(__name__)

SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"


def post_from_message(message: Message) -> StudioPost:
    kind = PostKind.TEXT
    file_id = None

    if message.photo:
        kind = PostKind.PHOTO
        largest = max(message.photo, key=lambda size: (size.width * size.height, size.file_size or 0))
        file_id = largest.file_id
    elif message.video:
        kind = PostKind.VIDEO
        file_id = message.video.file_id

    body = message.caption or message.text or ""

    return StudioPost(
        id=message.message_id,
        kind=kind,
        file_id=file_id,
        title=first_line(body, 100),
        caption=body,
        posted_at=message.date,
        tags=[],
    )


def _chat_type(message: Optional[Message]) -> Optional[str]:
    chat = getattr(message, "chat", None)
    return getattr(chat, "type", None)


class TelegramInbox:
    """
    Turns webhook deliveries into StudioPost and proxies media files
    so the bot token stays on the server.
    """

    def __init__(
        self,
        bot_token: Optional[str] = None,
        secret: Optional[str] = None,
        *,
        timeout: float = 12.0,
        bot: Optional[Bot] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.secret = secret
        self.timeout = timeout
        self.transport = transport
        self.bot = bot or (Bot(token=bot_token) if bot_token else None)

    def is_authorized(self, header_value: Optional[str]) -> bool:
        """Without a configured secret every delivery is accepted."""
        if not self.secret:
            return True
        return secrets.compare_digest(header_value or "", self.secret)

    def parse_update(self, payload: Dict[str, Any]) -> Optional[StudioPost]:
        """
        Channel broadcasts and private messages become posts.
        Anything else, including payloads Telegram would never send, yields None.
        """
        if not isinstance(payload, dict):
            return None
        try:
            update = Update.de_json(payload, None)
            return self._classify(update) if update is not None else None
        except Exception as e:
            logger.warning(f"Ignoring malformed update: {e!r}")
            return None

    @staticmethod
    def _classify(update: Update) -> Optional[StudioPost]:
        channel_post = update.channel_post
        message = update.message

        if _chat_type(channel_post) == "channel":
            return post_from_message(channel_post)
        if _chat_type(message) == "private":
            return post_from_message(message)

        logger.debug(f"Ignoring update {update.update_id}: not a channel post or private message")
        return None

    async def fetch_file(self, file_id: str) -> Optional[Tuple[bytes, str]]:
        """
        Download a file by id. Returns (content, content_type),
        or None when Telegram does not know the file.
        """
        if self.bot is None:
            raise RuntimeError("BOT_TOKEN is not configured")

        try:
            tg_file = await self.bot.get_file(file_id)
        except BadRequest as e:
            logger.info(f"Unknown Telegram file {file_id}: {e}")
            return None
        if not tg_file.file_path:
            return None

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.get(tg_file.file_path)
            resp.raise_for_status()

        content_type = resp.headers.get("content-type") or "application/octet-stream"
        return resp.content, content_type
