"""Client for the PokeAPI with response caching and typed results."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from pokedexcli.cache import Cache

BASE_URL = "https://pokeapi.co/api/v2"
LOCATION_AREA_ENDPOINT = "/location-area"
POKEMON_ENDPOINT = "/pokemon/"

T = TypeVar("T")


class PokeAPIError(Exception):
    """Raised when a PokeAPI request fails or its response cannot be read."""


def _str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _int(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    return 0 if value is None else int(value)


def _list(data: dict[str, Any], key: str) -> list[Any]:
    return data.get(key) or []


def _dict(data: dict[str, Any], key: str) -> dict[str, Any]:
    return data.get(key) or {}


@dataclass(frozen=True)
class NamedResource:
    name: str = ""
    url: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NamedResource:
        return cls(name=_str(data, "name"), url=_str(data, "url"))


@dataclass(frozen=True)
class LocationAreaPage:
    """One page of location areas; ``next``/``previous`` are empty at the ends."""

    count: int = 0
    next: str = ""
    previous: str = ""
    results: list[NamedResource] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LocationAreaPage:
        return cls(
            count=_int(data, "count"),
            next=_str(data, "next"),
            previous=_str(data, "previous"),
            results=[NamedResource.from_dict(r) for r in _list(data, "results")],
        )


@dataclass(frozen=True)
class Area:
    id: int = 0
    name: str = ""
    game_index: int = 0
    location: NamedResource = field(default_factory=NamedResource)
    pokemon_encounters: list[NamedResource] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Area:
        return cls(
            id=_int(data, "id"),
            name=_str(data, "name"),
            game_index=_int(data, "game_index"),
            location=NamedResource.from_dict(_dict(data, "location")),
            pokemon_encounters=[
                NamedResource.from_dict(_dict(e, "pokemon"))
                for e in _list(data, "pokemon_encounters")
            ],
        )


@dataclass(frozen=True)
class PokemonStat:
    name: str = ""
    base_stat: int = 0
    effort: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PokemonStat:
        return cls(
            name=_str(_dict(data, "stat"), "name"),
            base_stat=_int(data, "base_stat"),
            effort=_int(data, "effort"),
        )


@dataclass(frozen=True)
class PokemonType:
    name: str = ""
    slot: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PokemonType:
        return cls(name=_str(_dict(data, "type"), "name"), slot=_int(data, "slot"))


@dataclass(frozen=True)
class Pokemon:
    id: int = 0
    name: str = ""
    base_experience: int = 0
    height: int = 0
    weight: int = 0
    is_default: bool = False
    order: int = 0
    species: NamedResource = field(default_factory=NamedResource)
    stats: list[PokemonStat] = field(default_factory=list)
    types: list[PokemonType] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Pokemon:
        return cls(
            id=_int(data, "id"),
            name=_str(data, "name"),
            base_experience=_int(data, "base_experience"),
            height=_int(data, "height"),
            weight=_int(data, "weight"),
            is_default=bool(data.get("is_default", False)),
            order=_int(data, "order"),
            species=NamedResource.from_dict(_dict(data, "species")),
            stats=[PokemonStat.from_dict(s) for s in _list(data, "stats")],
            types=[PokemonType.from_dict(t) for t in _list(data, "types")],
        )


def _decode(body: bytes, factory: Callable[[dict[str, Any]], T]) -> T:
    try:
        return factory(json.loads(body))
    except (ValueError, TypeError, AttributeError) as err:
        raise PokeAPIError(f"Failed to decode json, got err: {err}") from err


class Client:
    """HTTP client for the PokeAPI; raw response bodies are cached by URL."""

    def __init__(self, timeout: float = 30.0, cache_interval: float = 300.0) -> None:
        self.timeout = timeout
        self.cache = Cache(cache_interval)

    def get_location_area(self, url: str | None = None) -> LocationAreaPage:
        """Fetch a page of location areas; None means the first page."""
        target = BASE_URL + LOCATION_AREA_ENDPOINT if url is None else url
        if target == "":
            raise PokeAPIError("You're on the first page")
        body = self._fetch(target, target)
        return _decode(body, LocationAreaPage.from_dict)

    def get_area(self, area_name: str) -> Area:
        """Fetch one location area by name."""
        if not area_name:
            raise PokeAPIError("No area input...")
        body = self._fetch(f"{BASE_URL}/location-area/{area_name}", area_name)
        return _decode(body, Area.from_dict)

    def get_pokemon(self, pokemon_name: str) -> Pokemon:
        """Fetch one pokemon by name."""
        if not pokemon_name:
            raise PokeAPIError("Empty pokemonName...")
        body = self._fetch(f"{BASE_URL}{POKEMON_ENDPOINT}{pokemon_name}", pokemon_name)
        return _decode(body, Pokemon.from_dict)

    def close(self) -> None:
        """Release the cache's background reaper."""
        self.cache.close()

    def _fetch(self, url: str, label: str) -> bytes:
        try:
            return self._get(url)
        except PokeAPIError as err:
            raise PokeAPIError(
                f"GET request error with url: {label} got this error: {err}"
            ) from err

    def _get(self, url: str) -> bytes:
        cached = self.cache.get(url)
        if cached is not None:
            return cached
        try:
            with urllib.request.urlopen(url, timeout=self.timeout) as response:
                status = response.status
                body = response.read()
        except urllib.error.HTTPError as err:
            body = err.read() or b""
            raise PokeAPIError(
                f"Request failed with status code: {err.code} and body:\n "
                f"{body.decode(errors='replace')}"
            ) from err
        except (urllib.error.URLError, OSError) as err:
            raise PokeAPIError(f"Error while requesting PokeAPI: {err}") from err
        if status > 299:
            raise PokeAPIError(
                f"Request failed with status code: {status} and body:\n "
                f"{body.decode(errors='replace')}"
            )
        self.cache.add(url, body)
        return body