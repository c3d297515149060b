"""Greeting lookups from a fixed language table."""

import random
from datetime import UTC, datetime

from userhub.schemas.hello import HelloMessage

DEFAULT_LANGUAGE = "en"

MESSAGES: dict[str, str] = {
    "en": "Hello World!",
    "es": "¡Hola Mundo!",
    "fr": "Bonjour le monde!",
    "de": "Hallo Welt!",
    "it": "Ciao Mondo!",
    "pt": "Olá Mundo!",
    "ja": "こんにちは世界！",
    "ko": "안녕하세요 세계!",
    "zh": "你好世界！",
}

# Words meaning "world" that a personalized greeting swaps for the name
WORLD_WORDS = ("World", "Mundo", "monde", "Welt", "Mondo")


class HelloService:
    """Stateless greetings; unknown languages fall back to English."""

    def __init__(self, messages: dict[str, str] | None = None):
        self.messages = dict(messages or MESSAGES)

    def get_hello_message(self, language: str = DEFAULT_LANGUAGE) -> HelloMessage:
        normalized = language.lower()
        message = self.messages.get(normalized, self.messages[DEFAULT_LANGUAGE])
        return HelloMessage(message=message, language=normalized, timestamp=datetime.now(UTC))

    def get_personalized_hello(self, name: str, language: str = DEFAULT_LANGUAGE) -> HelloMessage:
        greeting = self.get_hello_message(language)
        message = greeting.message
        for word in WORLD_WORDS:
            if word in message:
                # One substitution only; the name itself may contain a "world" word
                message = message.replace(word, name, 1)
                break
        return greeting.model_copy(update={"message": message})

    def get_all_supported_languages(self) -> list[str]:
        return list(self.messages)

    def get_random_hello(self) -> HelloMessage:
        return self.get_hello_message(random.choice(self.get_all_supported_languages()))
