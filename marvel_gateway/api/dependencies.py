"""Route Dependencies — hand the app-owned store and upstream client to handlers."""

from fastapi import Request

from marvel_gateway.core.character_store import CharacterStore
from marvel_gateway.infrastructure.marvel_client import MarvelAPIClient


def get_character_store(request: Request) -> CharacterStore:
    return request.app.state.character_store


def get_marvel_client(request: Request) -> MarvelAPIClient:
    return request.app.state.marvel_client
