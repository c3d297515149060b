"""Pydantic schemas for greetings."""

from datetime import datetime

from userhub.schemas.base import BaseResponse


class HelloMessage(BaseResponse):
    message: str
    language: str
    timestamp: datetime


class LanguagesData(BaseResponse):
    languages: list[str]
    count: int
