import asyncio
import base64
import logging
import time
from typing import Any, Dict, List, Optional

import httpx
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_ollama import ChatOllama
from openai import AsyncOpenAI
from pydantic import ValidationError

from core.schemas import ArticleSummary, ReceiptVerdict
from processing.text import MAX_ARTICLE_CHARS, parse_json_loose, strip_html

logger = logging.getLogger(__name__)

SUMMARY_SYSTEM = "You summarize news accurately and concisely. No speculation."
SUMMARY_PROMPT = (
    'Summarize into JSON with keys: {"short_story":"80-140 words","bullets":["...","...","..."]}. '
    "Use neutral tone."
)
TRANSLATE_SYSTEM = (
    "Translate news text. Keep names and numbers. Urdu in Nastaliq; "
    "Telugu proper script. Target: {target}."
)
RECEIPT_SYSTEM = (
    "Verify subscription payment screenshot. Extract amount (INR), date/time, gateway, txid. "
    "ok=true only if amount >= 599 and within last 24h. "
    "Return JSON: {ok, amount?, time?, gateway?, txid?, reason?}"
)


class SpeechUnavailableError(RuntimeError):
    """Raised when speech synthesis has no API key configured."""


class TextService:
    """
    Language-model capabilities used by the API: article summaries,
    translation, receipt verification (Ollama via LangChain) and
    speech synthesis (OpenAI).
    """

    def __init__(
        self,
        base_url: str,
        model: str,
        vision_model: Optional[str] = None,
        temperature: float = 0.2,
        timeout: float = 60.0,
        fetch_timeout: float = 12.0,
        openai_api_key: Optional[str] = None,
        tts_model: str = "gpt-4o-mini-tts",
        tts_voice: str = "alloy",
        chat_model: Any = None,
        vision_chat_model: Any = None,
        speech_client: Optional[AsyncOpenAI] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        # ChatOllama uses Ollama's native API, not OpenAI-compatible /v1 endpoint
        if base_url.endswith("/v1"):
            base_url = base_url[:-3]
        elif base_url.endswith("/v1/"):
            base_url = base_url[:-4]

        self.base_url = base_url.rstrip('/')
        self.model = model
        self.vision_model = vision_model or model
        self.timeout = timeout
        self.fetch_timeout = fetch_timeout
        self.tts_model = tts_model
        self.tts_voice = tts_voice
        self.transport = transport

        self.llm = chat_model or ChatOllama(
            base_url=self.base_url,
            model=model,
            temperature=temperature,
            num_ctx=4096,
        )
        self.vision_llm = vision_chat_model or ChatOllama(
            base_url=self.base_url,
            model=self.vision_model,
            temperature=0.0,
        )

        self._openai_api_key = openai_api_key
        self._speech_client = speech_client

    async def _invoke(self, llm: Any, messages: List[BaseMessage]) -> str:
        """
        Single attempt with a deadline. Returns the reply text.
        """
        start = time.time()
        response = await asyncio.wait_for(llm.ainvoke(messages), timeout=self.timeout)
        latency_ms = int((time.time() - start) * 1000)
        logger.debug(f"LLM call took {latency_ms}ms")

        content = response.content
        if isinstance(content, list):
            content = "".join(
                part.get("text", "") if isinstance(part, dict) else str(part)
                for part in content
            )
        return content or ""

    async def fetch_article_text(self, url: str) -> str:
        async with httpx.AsyncClient(
            timeout=self.fetch_timeout,
            transport=self.transport,
            follow_redirects=True,
        ) as client:
            resp = await client.get(url)
            resp.raise_for_status()
        return strip_html(resp.text)[:MAX_ARTICLE_CHARS]

    async def summarize(self, url: str) -> ArticleSummary:
        """
        Summarize the article at url.
        Never raises; an empty summary signals failure.
        """
        try:
            text = await self.fetch_article_text(url)
            content = await self._invoke(
                self.llm,
                [
                    SystemMessage(content=SUMMARY_SYSTEM),
                    HumanMessage(content=SUMMARY_PROMPT + "\n\n" + text),
                ],
            )
        except Exception as e:
            logger.warning(f"Summarization failed for {url}: {e!r}")
            return ArticleSummary()

        parsed = parse_json_loose(content)
        if parsed is None:
            logger.warning(f"Unparseable summary for {url}")
            return ArticleSummary()

        try:
            return ArticleSummary.model_validate(parsed)
        except ValidationError as e:
            logger.warning(f"Invalid summary for {url}: {e.error_count()} errors")
            return ArticleSummary()

    async def translate(self, text: str, target: str) -> str:
        content = await self._invoke(
            self.llm,
            [
                SystemMessage(content=TRANSLATE_SYSTEM.format(target=target)),
                HumanMessage(content=text),
            ],
        )
        return content.strip()

    async def verify_receipt(self, image: bytes, mime_type: str = "image/png") -> Dict[str, Any]:
        encoded = base64.b64encode(image).decode("ascii")
        content = await self._invoke(
            self.vision_llm,
            [
                SystemMessage(content=RECEIPT_SYSTEM),
                HumanMessage(content=[
                    {"type": "text", "text": "Check this receipt."},
                    {"type": "image_url", "image_url": f"data:{mime_type};base64,{encoded}"},
                ]),
            ],
        )

        parsed = parse_json_loose(content)
        if parsed is None:
            return {"ok": False, "reason": "parse_error"}
        try:
            verdict = ReceiptVerdict.model_validate(parsed)
        except ValidationError:
            return {"ok": False, "reason": "parse_error"}
        return verdict.model_dump(exclude_none=True)

    def _speech(self) -> AsyncOpenAI:
        if self._speech_client is None:
            if not self._openai_api_key:
                raise SpeechUnavailableError("OPENAI_API_KEY is not configured")
            self._speech_client = AsyncOpenAI(api_key=self._openai_api_key)
        return self._speech_client

    async def speak(self, text: str) -> bytes:
        """Synthesize text to MP3 bytes."""
        speech = await self._speech().audio.speech.create(
            model=self.tts_model,
            voice=self.tts_voice,
            input=text,
            response_format="mp3",
        )
        return speech.content

    async def health_check(self) -> bool:
        """
        Check if the Ollama server is reachable by calling /api/tags.
        """
        url = f"{self.base_url}/api/tags"
        try:
            async with httpx.AsyncClient(timeout=5.0, transport=self.transport) as client:
                resp = await client.get(url)
                if resp.status_code == 200:
                    return True
                logger.error(f"Ollama health check failed: {resp.status_code} {resp.text}")
                return False
        except Exception as e:
            logger.error(f"Ollama health check error: {e} (url={url})")
            return False
