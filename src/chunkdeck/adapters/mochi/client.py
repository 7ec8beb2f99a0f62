"""HTTP client for the Mochi API."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Protocol, Self

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from chunkdeck.adapters.http_resilience import ResilientClient, build_limiter

from .schema import (
    CardPayload,
    CreateCardRequest,
    CreateDeckRequest,
    DeckListResponse,
    DeckPayload,
    FieldValue,
)

if TYPE_CHECKING:
    from collections.abc import Coroutine, Mapping
    from types import TracebackType

    from aiolimiter import AsyncLimiter

    from chunkdeck.config.http_resilience import ResilienceConfig
    from chunkdeck.config.mochi import MochiConfig

log = getLogger(__name__)


class ClientFactory(Protocol):
    def __call__(
        self, resilience: ResilienceConfig, *, limiter: AsyncLimiter | None
    ) -> ResilientClient: ...


class MochiAPIError(RuntimeError):
    """Raised when the Mochi API answers with an error status or an unexpected body."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _validate[TModel: BaseModel](model: type[TModel], payload: object, endpoint: str) -> TModel:
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise MochiAPIError(f"Unexpected Mochi response from {endpoint}: {exc}") from exc


class MochiClient:
    """Low-level HTTP client for the Mochi API.

    Calls are synchronous. They run on one event loop owned by the client and
    draw from one rate limiter, so the request budget holds across calls.
    Close the client, or use it as a context manager, to release the loop.
    """

    def __init__(
        self,
        *,
        config: MochiConfig,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or self._default_factory
        self._limiter = build_limiter(config.resilience.ratelimit)
        self._runner = asyncio.Runner()

    def _default_factory(
        self, resilience: ResilienceConfig, *, limiter: AsyncLimiter | None
    ) -> ResilientClient:
        # Mochi uses basic auth with the API key as user name and no password.
        return ResilientClient(
            resilience,
            auth=httpx.BasicAuth(self._config.api_key, ""),
            limiter=limiter,
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._runner.close()

    def _run[T](self, coro: Coroutine[object, object, T]) -> T:
        return self._runner.run(coro)

    def _open(self) -> ResilientClient:
        return self._client_factory(self._resilience, limiter=self._limiter)

    def list_decks(self) -> list[DeckPayload]:
        return self._run(self._list_decks_async())

    def create_deck(self, *, name: str, parent_id: str | None = None) -> DeckPayload:
        request = CreateDeckRequest(name=name, parent_id=parent_id)
        payload = self._run(
            self._post_async("/decks", request.model_dump(by_alias=True, exclude_none=True))
        )
        return _validate(DeckPayload, payload, "POST /decks")

    def create_card(
        self,
        *,
        deck_id: str,
        template_id: str,
        fields: Mapping[str, str],
    ) -> CardPayload:
        request = CreateCardRequest(
            deck_id=deck_id,
            template_id=template_id,
            field_values={
                field_id: FieldValue(id=field_id, value=value) for field_id, value in fields.items()
            },
        )
        payload = self._run(self._post_async("/cards", request.model_dump(by_alias=True)))
        return _validate(CardPayload, payload, "POST /cards")

    async def _list_decks_async(self) -> list[DeckPayload]:
        decks: list[DeckPayload] = []
        bookmark: str | None = None
        async with self._open() as client:
            while True:
                params = {"bookmark": bookmark} if bookmark else None
                payload = await self._perform_request(client, "GET", "/decks", params=params)
                page = _validate(DeckListResponse, payload, "GET /decks")
                decks.extend(page.docs)
                if not page.docs or not page.bookmark or page.bookmark == bookmark:
                    break
                bookmark = page.bookmark
        log.debug("Listed %d deck(s)", len(decks))
        return decks

    async def _post_async(self, path: str, body: dict[str, object]) -> object:
        async with self._open() as client:
            return await self._perform_request(client, "POST", path, json=body)


    async def _perform_request(
        self,
        client: ResilientClient,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: object = None,
    ) -> object:
        url = f"{self._resilience.base_url or ''}{path}"
        if method == "GET":
            response = await client.get(url, params=params)
        else:
            response = await client.post(url, json=json)

        if response.is_error:
            log.error("Mochi API %s %s -> %s", method, path, response.status_code)
            raise MochiAPIError(
                f"Mochi API {method} {path} -> {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise MochiAPIError(f"Mochi API {method} {path} returned invalid JSON") from exc
