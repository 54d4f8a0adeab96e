from html import escape
from typing import List
from telegram import Bot, LinkPreviewOptions
from telegram.constants import ParseMode

from core.entities import BreakingItem
from delivery.base import DeliveryChannel


class TelegramDelivery(DeliveryChannel):
    name = "telegram"

    def __init__(self, bot_token: str, chat_id: str, bot: Bot | None = None):
        self.bot = bot or Bot(token=bot_token)
        self.chat_id = chat_id

    @staticmethod
    def format_message(headline: str, entries: List[BreakingItem]) -> str:
        message = [f"<b>{escape(headline)}</b>", ""]

        for entry in entries:
            message.append(f"• <a href=\"{escape(entry.link, quote=True)}\">{escape(entry.title)}</a>")
            if entry.source:
                message.append(f"<i>{escape(entry.source)}</i>")

        return "\n".join(message)

    async def deliver(self, *, headline: str, entries: List[BreakingItem]) -> None:
        await self.bot.send_message(
            chat_id=self.chat_id,
            text=self.format_message(headline, entries),
            parse_mode=ParseMode.HTML,
            link_preview_options=LinkPreviewOptions(is_disabled=True),
        )
