"""HTTP handlers for /api/hello."""

from fastapi import Response

from userhub.logger import Logger
from userhub.schemas.hello import LanguagesData
from userhub.services.hello_service import DEFAULT_LANGUAGE, HelloService
from userhub.utils import http_response


class HelloController:
    def __init__(self, service: HelloService, logger: Logger | None = None):
        self.service = service
        self.logger = (logger or Logger()).child(module="HelloController")

    async def hello(self, lang: str | None = None) -> Response:
        language = lang or DEFAULT_LANGUAGE
        self.logger.info("Greeting", language=language)
        try:
            greeting = self.service.get_hello_message(language)
        except Exception as exc:
            self.logger.error("Greeting failed", exc, language=language)
            return http_response.internal_error()
        return http_response.success(greeting.model_dump(mode="json"))

    async def personalized_hello(self, name: str | None, lang: str | None = None) -> Response:
        if not name or not name.strip():
            return http_response.bad_request("Name parameter is required")

        language = lang or DEFAULT_LANGUAGE
        self.logger.info("Personalized greeting", language=language)
        try:
            greeting = self.service.get_personalized_hello(name.strip(), language)
        except Exception as exc:
            self.logger.error("Personalized greeting failed", exc, language=language)
            return http_response.internal_error()
        return http_response.success(greeting.model_dump(mode="json"))

    async def random_hello(self) -> Response:
        self.logger.info("Random greeting")
        try:
            greeting = self.service.get_random_hello()
        except Exception as exc:
            self.logger.error("Random greeting failed", exc)
            return http_response.internal_error()
        return http_response.success(greeting.model_dump(mode="json"))

    async def supported_languages(self) -> Response:
        self.logger.info("Listing supported languages")
        try:
            languages = self.service.get_all_supported_languages()
        except Exception as exc:
            self.logger.error("Listing supported languages failed", exc)
            return http_response.internal_error()
        data = LanguagesData(languages=languages, count=len(languages))
        return http_response.success(data.model_dump(mode="json"))
