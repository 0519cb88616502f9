"""Interactive Pokedex command loop and its commands."""

from __future__ import annotations

import argparse
import random
import sys
from dataclasses import dataclass, field
from typing import Callable, Iterator, Protocol, TextIO

from pokedexcli.pokeapi import Client, PokeAPIError, Pokemon

PROMPT = "Pokedex > "


class CommandError(Exception):
    """Raised when a command cannot be carried out."""


class _RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


@dataclass
class Config:
    """State shared by the commands across one session."""

    client: Client
    pokedex: dict[str, Pokemon] = field(default_factory=dict)
    next_url: str | None = None
    prev_url: str | None = None
    rng: _RandomSource = field(default_factory=random.Random)


@dataclass(frozen=True)
class Command:
    name: str
    description: str
    callback: Callable[[Config, str], None]

    def help(self) -> str:
        """One-line usage text for this command."""
        return f"{self.name}: {self.description}"


def clean_input(text: str) -> list[str]:
    """Lower-case ``text`` and split it on whitespace."""
    return text.lower().split()


def command_exit(config: Config, arg: str) -> None:
    """Say goodbye, release the session's client and end the program."""
    print("Closing the Pokedex... Goodbye!")
    config.client.close()
    sys.exit(0)


def command_help(config: Config, arg: str) -> None:
    print("\nWelcome to the Pokedex!\nUsage:")
    print()
    for command in get_commands().values():
        print(command.help())
    print()


def _show_page(config: Config, url: str | None) -> None:
    page = config.client.get_location_area(url)
    for area in page.results:
        print(area.name)
    config.next_url = page.next
    config.prev_url = page.previous


def command_map(config: Config, arg: str) -> None:
    _show_page(config, config.next_url)


def command_mapb(config: Config, arg: str) -> None:
    _show_page(config, config.prev_url)


def command_explore(config: Config, area_name: str) -> None:
    area = config.client.get_area(area_name)
    print(f"Exploring {area.name}...")
    print("Found Pokemon:")
    for pokemon in area.pokemon_encounters:
        print(f" - {pokemon.name}")


def catch_logic(config: Config, pokemon: Pokemon, rng: _RandomSource) -> bool:
    """Decide whether a throw catches ``pokemon``; failed tries are remembered in the cache."""
    base = pokemon.base_experience
    if base <= 0:
        raise CommandError(f"{pokemon.name} has no base experience to catch against.")
    tries = config.client.cache.get(pokemon.name)
    user_chance = rng.randrange(base * 2)
    if user_chance >= base:
        return True
    if tries is None:
        config.client.cache.add(pokemon.name, bytes([1]))
        return False
    # Each previous try adds 10% of the base experience, in whole multiples.
    bonus = base * ((tries[0] * 10) // 100)
    return user_chance + bonus >= base


def command_catch(config: Config, pokemon_name: str) -> None:
    if pokemon_name in config.pokedex:
        raise CommandError(f"{pokemon_name} already caught.")
    pokemon = config.client.get_pokemon(pokemon_name)
    print(f"Throwing a Pokeball at {pokemon.name}...")
    if catch_logic(config, pokemon, config.rng):
        print(f"{pokemon.name} was caught!")
        config.pokedex[pokemon.name] = pokemon
        print("You may now inspect it with the inspect command.")
    else:
        print(f"{pokemon.name} escaped!")


def command_inspect(config: Config, pokemon_name: str) -> None:
    pokemon = config.pokedex.get(pokemon_name)
    if pokemon is None:
        raise CommandError("you have not caught that pokemon")
    print(f"Name: {pokemon.name}")
    print(f"Height: {pokemon.height}")
    print(f"Weight: {pokemon.weight}")
    print("Stats:")
    for stat in pokemon.stats:
        print(f"  -{stat.name}: {stat.base_stat}")
    print("Types:")
    for kind in pokemon.types:
        print(f"  -{kind.name}")


def command_pokedex(config: Config, arg: str) -> None:
    if not config.pokedex:
        raise CommandError("Empty Pokedex, catch something first.")
    print("Your pokedex:")
    for name in config.pokedex:
        print(f" - {name}")


def get_commands() -> dict[str, Command]:
    """All commands the loop understands, keyed by name."""
    commands = [
        Command("exit", "Exit the Pokedex.", command_exit),
        Command("help", "Displays a help message.", command_help),
        Command("map", "Display the name of the 20 next areas.", command_map),
        Command("mapb", "Display the name of the 20 previous areas.", command_mapb),
        Command("explore", "Explore an <area> and found pokemon.", command_explore),
        Command("catch", "Try to catch a <pokemon> !", command_catch),
        Command(
            "inspect",
            "Inspect a <pokemon> characteristics. He must first be caught.",
            command_inspect,
        ),
        Command("pokedex", "List all pokemon that you have caught.", command_pokedex),
    ]
    return {command.name: command for command in commands}


def _prompted_lines(stdin: TextIO) -> Iterator[str]:
    while True:
        print(PROMPT, end="", flush=True)
        line = stdin.readline()
        if not line:
            return
        yield line


def start_repl(config: Config, stdin: TextIO) -> None:
    """Read commands from ``stdin`` until it is exhausted."""
    commands = get_commands()
    for line in _prompted_lines(stdin):
        words = clean_input(line)
        command = commands.get(words[0]) if words else None
        if command is None:
            print("Unknown command")
            continue
        try:
            command.callback(config, " ".join(words[1:]))
        except (CommandError, PokeAPIError) as err:
            print(err)
    print("No more inputs, exiting...")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="pokedexcli", description="Interactive Pokedex.")
    parser.parse_args(argv)
    client = Client(timeout=30.0, cache_interval=300.0)
    try:
        start_repl(Config(client=client), sys.stdin)
    finally:
        client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())