from collections.abc import Callable
from datetime import datetime

import httpx
import pytest
from fastapi import FastAPI, HTTPException, Response
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from app.libs.session_store import InMemorySessionStore
from app.services.hero_service import HeroService
from app.services.message_service import MessageService

SEED_HEROES = [
    {"id": 11, "name": "Dr Nice"},
    {"id": 12, "name": "Narco"},
    {"id": 13, "name": "Bombasto"},
    {"id": 14, "name": "Celeritas"},
    {"id": 15, "name": "Magneta"},
    {"id": 16, "name": "RubberMan"},
    {"id": 17, "name": "Dynama"},
    {"id": 18, "name": "Dr IQ"},
    {"id": 19, "name": "Magma"},
    {"id": 20, "name": "Tornado"},
]

FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5)


class _HeroPayload(BaseModel):
    id: int | None = None
    name: str


def create_heroes_app(seed: list[dict]) -> FastAPI:
    """In-memory heroes API mirroring the backend contract."""
    app = FastAPI()
    db: dict[int, dict] = {hero["id"]: dict(hero) for hero in seed}

    @app.get("/api/heroes")
    @app.get("/api/heroes/")
    async def list_heroes(name: str | None = None) -> list[dict]:
        heroes = list(db.values())
        if name:
            heroes = [hero for hero in heroes if name.lower() in hero["name"].lower()]
        return heroes

    @app.get("/api/heroes/{hero_id}")
    async def get_hero(hero_id: int) -> dict:
        if hero_id not in db:
            raise HTTPException(status_code=404, detail="Hero not found")
        return db[hero_id]

    @app.post("/api/heroes", status_code=201)
    async def create_hero(payload: _HeroPayload) -> dict:
        new_id = max(db, default=10) + 1
        db[new_id] = {"id": new_id, "name": payload.name}
        return db[new_id]

    @app.put("/api/heroes")
    async def update_hero(payload: _HeroPayload) -> Response:
        if payload.id not in db:
            raise HTTPException(status_code=404, detail="Hero not found")
        db[payload.id] = {"id": payload.id, "name": payload.name}
        return Response(status_code=204)

    @app.delete("/api/heroes/{hero_id}")
    async def delete_hero(hero_id: int) -> Response:
        if hero_id not in db:
            raise HTTPException(status_code=404, detail="Hero not found")
        del db[hero_id]
        return Response(status_code=204)

    app.state.db = db
    return app


@pytest.fixture
def heroes_app() -> FastAPI:
    return create_heroes_app(SEED_HEROES)


@pytest.fixture
def message_service() -> MessageService:
    return MessageService()


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def make_service(message_service, session_store) -> Callable[[AsyncClient], HeroService]:
    """Factory binding a HeroService to a given client with a fixed clock."""

    def _make(http_client: AsyncClient) -> HeroService:
        return HeroService(
            locale="ja-JP",
            http_client=http_client,
            message_service=message_service,
            session_store=session_store,
            clock=lambda: FIXED_NOW,
        )

    return _make


@pytest.fixture
async def service(heroes_app, make_service):
    """HeroService talking to the in-memory API."""
    transport = ASGITransport(app=heroes_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield make_service(ac)


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
async def mock_client(recorded_requests):
    """
    Build an AsyncClient over httpx.MockTransport.

    Every request passing through the handler is appended to
    ``recorded_requests``.
    """
    clients: list[AsyncClient] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> AsyncClient:
        def _record(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        client = AsyncClient(transport=httpx.MockTransport(_record), base_url="http://test")
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()
