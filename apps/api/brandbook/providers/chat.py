import logging
from abc import ABC, abstractmethod

import httpx

from brandbook.core import get_settings

logger = logging.getLogger(__name__)


class ChatServiceError(Exception):
    """Raised when the chat/LLM API is unavailable or returns invalid or unexpected output."""


class ChatRateLimitError(ChatServiceError):
    """Raised when the chat/LLM API rate limits the request."""


class ChatConfigError(ChatServiceError):
    """Raised when no chat/LLM backend is configured."""


def _raise_for_http_error(e: httpx.HTTPStatusError, api_name: str) -> None:
    if e.response.status_code == 429:
        raise ChatRateLimitError(f"{api_name} rate limited the request. Please retry later.") from e
    body = getattr(e.response, "text", None) or ""
    if body:
        logger.warning("%s error %s: %s", api_name, e.response.status_code, body[:500])
    raise ChatServiceError(
        f"{api_name} returned {e.response.status_code}. Please try again later."
    ) from e


class ChatProvider(ABC):
    """Single-turn text completion. Any transport or non-2xx error surfaces as ChatServiceError."""

    model: str

    @abstractmethod
    async def _chat(
        self,
        messages: list[dict[str, str]],
        max_tokens: int,
        temperature: float | None = None,
    ) -> str:
        pass

    async def chat(self, user_message: str, max_tokens: int = 4096, temperature: float | None = None) -> str:
        """Send a single user message and return the assistant reply."""
        return await self._chat(
            [{"role": "user", "content": user_message}],
            max_tokens=max_tokens,
            temperature=temperature,
        )


class AnthropicChatProvider(ChatProvider):
    """Anthropic Messages API."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://api.anthropic.com",
        api_version: str = "2023-06-01",
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version
        self.timeout = timeout
        self._transport = transport

    async def _chat(
        self,
        messages: list[dict[str, str]],
        max_tokens: int,
        temperature: float | None = None,
    ) -> str:
        payload = {
            "model": self.model,
            "max_tokens": max_tokens,
            "messages": messages,
        }
        if temperature is not None:
            payload["temperature"] = temperature
        headers = {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.post(f"{self.base_url}/v1/messages", json=payload, headers=headers)
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPStatusError as e:
            _raise_for_http_error(e, "Anthropic API")
        except httpx.RequestError as e:
            raise ChatServiceError(
                "Anthropic API unavailable (timeout or connection error). Please try again later."
            ) from e
        except ValueError as e:
            raise ChatServiceError("Anthropic API returned a non-JSON response.") from e

        try:
            block = (data.get("content") or [])[0]
        except (AttributeError, IndexError) as e:
            raise ChatServiceError("Anthropic API returned no content.") from e
        if not isinstance(block, dict) or block.get("type") != "text":
            raise ChatServiceError("Unexpected response type from Anthropic API.")
        text = block.get("text")
        if not isinstance(text, str) or not text.strip():
            raise ChatServiceError("Anthropic API returned empty content.")
        return text.strip()


class OpenAICompatibleChatProvider(ChatProvider):
    """OpenAI-compatible endpoint (vLLM, etc.)."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None,
        model: str,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        if not self.base_url.endswith("/v1"):
            self.base_url = f"{self.base_url}/v1"
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._transport = transport

    async def _chat(
        self,
        messages: list[dict[str, str]],
        max_tokens: int,
        temperature: float | None = None,
    ) -> str:
        payload = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature if temperature is not None else 0.2,
        }
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers=headers,
                )
                r.raise_for_status()
                data = r.json()
                choices = data.get("choices") or []
                if not choices:
                    raise ChatServiceError(
                        "Chat API returned no choices (e.g. content filter)."
                    )
                msg = choices[0].get("message") or {}
                content = msg.get("content")
                if content is None or not isinstance(content, str):
                    raise ChatServiceError(
                        "Chat API returned missing or non-string content."
                    )
                stripped = content.strip()
                if not stripped:
                    raise ChatServiceError(
                        "Chat API returned empty content (LLM may have failed or been rate-limited)."
                    )
                return stripped
        except httpx.HTTPStatusError as e:
            _raise_for_http_error(e, "Chat API")
        except httpx.RequestError as e:
            raise ChatServiceError(
                "Chat service unavailable (timeout or connection error). Please try again later."
            ) from e
        except (KeyError, TypeError, IndexError, ValueError) as e:
            raise ChatServiceError("Chat API returned unexpected response format.") from e


# Default model for OpenAI official API when CHAT_MODEL is not set
_OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
# Default model for OpenAI-compatible (vLLM, etc.) when CHAT_MODEL is not set
_OPENAI_COMPATIBLE_DEFAULT_MODEL = "Qwen/Qwen2.5-7B-Instruct"


def get_chat_provider() -> ChatProvider:
    s = get_settings()
    if s.anthropic_api_key:
        return AnthropicChatProvider(
            api_key=s.anthropic_api_key,
            model=s.extraction_model,
            base_url=s.anthropic_base_url,
            api_version=s.anthropic_version,
            timeout=s.chat_timeout_seconds,
        )
    if s.chat_api_base_url:
        return OpenAICompatibleChatProvider(
            base_url=s.chat_api_base_url,
            api_key=s.chat_api_key,
            model=s.chat_model or _OPENAI_COMPATIBLE_DEFAULT_MODEL,
            timeout=s.chat_timeout_seconds,
        )
    if s.openai_api_key:
        return OpenAICompatibleChatProvider(
            base_url="https://api.openai.com/v1",
            api_key=s.openai_api_key,
            model=s.chat_model or _OPENAI_DEFAULT_MODEL,
            timeout=s.chat_timeout_seconds,
        )
    raise ChatConfigError(
        "Chat LLM not configured. Set ANTHROPIC_API_KEY, or CHAT_API_BASE_URL (and CHAT_MODEL), or OPENAI_API_KEY."
    )
