"""Hero data access service.

Every request yields a Result. Failures are written to the diagnostic logger,
reported to the message list and replaced with a per-operation fallback, so
callers never see an exception from the transport.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter

from app.core.config import Settings, settings
from app.core.result import Failure, Result, Success
from app.libs.http_client import build_http_client, get_http_client
from app.libs.session_store import HERO_KEY, RAW_KEY, InMemorySessionStore, SessionStore
from app.models.hero import Hero
from app.services.message_service import MessageService, MessageSink

logger = logging.getLogger(__name__)

T = TypeVar("T")

HEROES_URL = "api/heroes"
JSON_HEADERS = {"Content-Type": "application/json"}
TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"

_hero_list = TypeAdapter(list[Hero])
_any_value = TypeAdapter(Any)


def _decode_body(response: httpx.Response) -> Any:
    """JSON body of a response, None when the body is empty."""
    if not response.content:
        return None
    return response.json()


class HeroService:
    """CRUD and search operations for heroes."""

    component_name = "HeroService"

    def __init__(
        self,
        locale: str,
        http_client: httpx.AsyncClient,
        message_service: MessageSink,
        session_store: SessionStore,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.locale = locale
        self._http_client = http_client
        self._message_service = message_service
        self._session_store = session_store
        self._clock = clock

    async def get_heroes(self) -> list[Hero]:
        """
        Fetch all heroes in server order.

        Returns:
            List of heroes, empty on failure
        """
        result = await self._send("GET", HEROES_URL)
        return (
            result.map(_hero_list.validate_python)
            .tap(lambda _: self.log("getHeroes"))
            .unwrap_or_else(self._handle_error("getHeroes", []))
        )

    async def get_hero(self, hero_id: int) -> Hero | None:
        """
        Fetch a hero by id and remember it in the session store.

        Args:
            hero_id: Server-assigned hero id

        Returns:
            Hero, or None on failure
        """
        operation = f"getHero id={hero_id}"
        result = await self._send("GET", f"{HEROES_URL}/{hero_id}")
        return (
            result.map(Hero.model_validate)
            .tap(lambda hero: self._session_store.set(HERO_KEY, hero.model_dump_json()))
            .tap(lambda _: self.log(operation))
            .unwrap_or_else(self._handle_error(operation, None))
        )

    async def add_hero(self, hero: Hero) -> Hero | None:
        """Create a hero; the returned hero carries the id assigned by the server."""
        result = await self._send(
            "POST",
            HEROES_URL,
            json=hero.model_dump(exclude_none=True),
            headers=JSON_HEADERS,
        )
        return (
            result.map(Hero.model_validate)
            .tap(lambda new_hero: self.log(f"addHero id={new_hero.id}"))
            .unwrap_or_else(self._handle_error("addHero", None))
        )

    async def update_hero(self, hero: Hero) -> Any:
        # The id travels in the body, the endpoint is the collection itself.
        result = await self._send(
            "PUT", HEROES_URL, json=hero.model_dump(), headers=JSON_HEADERS
        )
        return result.tap(lambda _: self.log(f"updateHero id={hero.id}")).unwrap_or_else(
            self._handle_error("updateHero", None)
        )

    async def delete_hero(self, hero: Hero) -> Hero | None:
        """
        Delete a saved hero.

        Raises:
            ValueError: If the hero has no server-assigned id yet
        """
        if hero.id is None:
            raise ValueError("Cannot delete a hero without an id")
        return await self.delete_hero_by_id(hero.id)

    async def delete_hero_by_id(self, hero_id: int) -> Hero | None:
        """
        Delete a hero by id.

        Returns:
            The deleted hero when the server echoes it, otherwise None
        """
        result = await self._send(
            "DELETE", f"{HEROES_URL}/{hero_id}", headers=JSON_HEADERS
        )
        return (
            result.map(lambda data: None if data is None else Hero.model_validate(data))
            .tap(lambda _: self.log(f"deleteHero id={hero_id}"))
            .unwrap_or_else(self._handle_error("deleteHero", None))
        )

    async def search_heroes(self, term: str) -> list[Hero]:
        """
        Find heroes whose name matches ``term``.

        A blank term returns an empty list without a request or a log line.
        """
        if not term.strip():
            return []

        operation = f'searchHeroes "{term}"'
        result = await self._send("GET", f"{HEROES_URL}/", params={"name": term})
        return (
            result.map(_hero_list.validate_python)
            .tap(lambda _: self.log(operation))
            .unwrap_or_else(self._handle_error(operation, []))
        )

    def cache_raw(self, value: Any) -> None:
        """Serialize any value to JSON and store it under the generic key."""
        self._session_store.set(RAW_KEY, _any_value.dump_json(value).decode())

    def log(self, message: str) -> None:
        """Append a timestamped line to the message list."""
        timestamp = self._clock().strftime(TIMESTAMP_FORMAT)
        entry = f"{timestamp} {self.component_name}: {message}"
        logger.debug(entry)
        self._message_service.add(entry)

    async def _send(self, method: str, url: str, **kwargs: Any) -> Result[Any]:
        try:
            response = await self._http_client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            return Failure(exc)
        return Success(response).map(_decode_body)

    def _handle_error(self, operation: str, fallback: T) -> Callable[[Failure], T]:
        """
        Build the failure handler for one call site.

        Args:
            operation: Name used in the failure log line
            fallback: Value returned to the caller instead of the error

        Returns:
            Function turning a Failure into ``fallback``
        """

        def handle(failure: Failure) -> T:
            logger.error(f"{operation} failed", exc_info=failure.error)
            self.log(f"{operation} failed: {failure.message}")
            return fallback

        return handle


def build_hero_service(
    app_settings: Settings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
    message_service: MessageSink | None = None,
    session_store: SessionStore | None = None,
) -> HeroService:
    """
    Wire a HeroService from settings with in-memory collaborators.

    Without explicit settings the process-wide client is shared.
    """
    if http_client is None:
        http_client = (
            get_http_client() if app_settings is None else build_http_client(app_settings)
        )
    app_settings = app_settings or settings
    if message_service is None:
        message_service = MessageService()
    if session_store is None:
        session_store = InMemorySessionStore()
    return HeroService(
        locale=app_settings.locale,
        http_client=http_client,
        message_service=message_service,
        session_store=session_store,
    )
