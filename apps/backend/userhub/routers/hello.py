"""Greeting API router."""

from fastapi import APIRouter, Query, Response

from userhub.deps import HelloControllerDep
from userhub.schemas import ApiResponse

router = APIRouter(prefix="/api/hello", tags=["hello"])


@router.get("", response_model=ApiResponse)
async def hello(
    controller: HelloControllerDep,
    lang: str | None = Query(None, description="Language code, e.g. 'fr'"),
) -> Response:
    return await controller.hello(lang)


@router.get("/personalized/{name}", response_model=ApiResponse)
async def personalized_hello(
    name: str,
    controller: HelloControllerDep,
    lang: str | None = Query(None),
) -> Response:
    return await controller.personalized_hello(name, lang)


@router.get("/random", response_model=ApiResponse)
async def random_hello(controller: HelloControllerDep) -> Response:
    return await controller.random_hello()


@router.get("/languages", response_model=ApiResponse)
async def supported_languages(controller: HelloControllerDep) -> Response:
    return await controller.supported_languages()
