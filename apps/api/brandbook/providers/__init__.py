from .chat import (
    AnthropicChatProvider,
    ChatConfigError,
    ChatProvider,
    ChatRateLimitError,
    ChatServiceError,
    OpenAICompatibleChatProvider,
    get_chat_provider,
)

__all__ = [
    "AnthropicChatProvider",
    "ChatConfigError",
    "ChatProvider",
    "ChatRateLimitError",
    "ChatServiceError",
    "OpenAICompatibleChatProvider",
    "get_chat_provider",
]
