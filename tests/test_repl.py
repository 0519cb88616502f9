import io
import json

import pytest

from pokedexcli import repl
from pokedexcli.pokeapi import (
    BASE_URL,
    Client,
    PokeAPIError,
    Pokemon,
    PokemonStat,
    PokemonType,
)
from pokedexcli.repl import (
    Command,
    CommandError,
    Config,
    catch_logic,
    clean_input,
    command_catch,
    command_exit,
    command_explore,
    command_help,
    command_inspect,
    command_map,
    command_mapb,
    command_pokedex,
    get_commands,
    start_repl,
)

FIRST_PAGE = BASE_URL + "/location-area"
SECOND_PAGE = BASE_URL + "/location-area?offset=20&limit=20"


class FixedRng:
    def __init__(self, value):
        self.value = value
        self.stops = []

    def randrange(self, stop):
        self.stops.append(stop)
        return self.value


@pytest.fixture
def client():
    c = Client(timeout=1.0, cache_interval=3600.0)
    yield c
    c.close()


def _put(client, url, data):
    client.cache.add(url, json.dumps(data).encode())


@pytest.fixture
def config(client):
    return Config(client=client)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("  Hello World  ", ["hello", "world"]),
        ("cashy  OS FTW", ["cashy", "os", "ftw"]),
        ("   ", []),
    ],
)
def test_clean_input(text, expected):
    assert clean_input(text) == expected


def test_command_help_text():
    cmd = Command("x", "does x", lambda c, a: None)
    assert cmd.help() == "x: does x"


def test_get_commands_names():
    commands = get_commands()
    assert set(commands) == {
        "exit", "help", "map", "mapb", "explore", "catch", "inspect", "pokedex",
    }
    assert commands["exit"].help() == "exit: Exit the Pokedex."


def test_help_lists_commands(config, capsys):
    command_help(config, "")
    out = capsys.readouterr().out
    assert out.startswith("\nWelcome to the Pokedex!\nUsage:\n\n")
    assert "catch: Try to catch a <pokemon> !\n" in out
    assert "pokedex: List all pokemon that you have caught.\n" in out


def test_exit(config, capsys):
    with pytest.raises(SystemExit) as info:
        command_exit(config, "")
    assert info.value.code == 0
    assert capsys.readouterr().out == "Closing the Pokedex... Goodbye!\n"


def test_map_and_mapb(config, client, capsys):
    _put(client, FIRST_PAGE, {
        "count": 40, "next": SECOND_PAGE, "previous": None,
        "results": [{"name": "canalave-city-area", "url": "u1"}, {"name": "eterna-city-area", "url": "u2"}],
    })
    _put(client, SECOND_PAGE, {
        "count": 40, "next": None, "previous": FIRST_PAGE,
        "results": [{"name": "pastoria-city-area", "url": "u3"}],
    })
    command_map(config, "")
    assert capsys.readouterr().out == "canalave-city-area\neterna-city-area\n"
    assert config.next_url == SECOND_PAGE
    assert config.prev_url == ""
    with pytest.raises(PokeAPIError, match="You're on the first page"):
        command_mapb(config, "")
    command_map(config, "")
    assert capsys.readouterr().out == "pastoria-city-area\n"
    assert config.prev_url == FIRST_PAGE
    command_mapb(config, "")
    assert capsys.readouterr().out == "canalave-city-area\neterna-city-area\n"


def test_mapb_at_start_shows_first_page(config, client, capsys):
    _put(client, FIRST_PAGE, {"count": 1, "next": None, "previous": None,
                              "results": [{"name": "a", "url": "u"}]})
    command_mapb(config, "")
    assert capsys.readouterr().out == "a\n"


def test_explore(config, client, capsys):
    _put(client, BASE_URL + "/location-area/canalave-city-area", {
        "id": 1, "name": "canalave-city-area",
        "pokemon_encounters": [
            {"pokemon": {"name": "tentacool", "url": "u"}},
            {"pokemon": {"name": "staryu", "url": "u"}},
        ],
    })
    command_explore(config, "canalave-city-area")
    assert capsys.readouterr().out == (
        "Exploring canalave-city-area...\nFound Pokemon:\n - tentacool\n - staryu\n"
    )


def test_explore_empty_name(config):
    with pytest.raises(PokeAPIError, match="No area input"):
        command_explore(config, "")


def test_catch_logic_high_roll_catches(config):
    rng = FixedRng(60)
    assert catch_logic(config, Pokemon(name="pikachu", base_experience=50), rng) is True
    assert rng.stops == [100]


def test_catch_logic_first_miss_records_try(config, client):
    assert catch_logic(config, Pokemon(name="pikachu", base_experience=50), FixedRng(10)) is False
    assert client.cache.get("pikachu") == b"\x01"


def test_catch_logic_second_miss_without_bonus(config, client):
    client.cache.add("pikachu", b"\x01")
    assert catch_logic(config, Pokemon(name="pikachu", base_experience=50), FixedRng(10)) is False


def test_catch_logic_bonus_after_many_tries(config, client):
    client.cache.add("pikachu", bytes([10]))
    assert catch_logic(config, Pokemon(name="pikachu", base_experience=50), FixedRng(0)) is True


def test_catch_logic_no_base_experience(config):
    with pytest.raises(CommandError):
        catch_logic(config, Pokemon(name="x", base_experience=0), FixedRng(0))


def test_catch_success(config, client, capsys):
    _put(client, BASE_URL + "/pokemon/pikachu", {"name": "pikachu", "base_experience": 112})
    config.rng = FixedRng(200)
    command_catch(config, "pikachu")
    out = capsys.readouterr().out
    assert out == (
        "Throwing a Pokeball at pikachu...\npikachu was caught!\n"
        "You may now inspect it with the inspect command.\n"
    )
    assert config.pokedex["pikachu"].base_experience == 112
    with pytest.raises(CommandError, match="pikachu already caught."):
        command_catch(config, "pikachu")


def test_catch_escape(config, client, capsys):
    _put(client, BASE_URL + "/pokemon/mew", {"name": "mew", "base_experience": 300})
    config.rng = FixedRng(0)
    command_catch(config, "mew")
    assert capsys.readouterr().out.endswith("mew escaped!\n")
    assert "mew" not in config.pokedex


def test_inspect(config, capsys):
    config.pokedex["pidgey"] = Pokemon(
        name="pidgey", height=3, weight=18,
        stats=[PokemonStat(name="hp", base_stat=40), PokemonStat(name="speed", base_stat=56)],
        types=[PokemonType(name="normal"), PokemonType(name="flying")],
    )
    command_inspect(config, "pidgey")
    assert capsys.readouterr().out == (
        "Name: pidgey\nHeight: 3\nWeight: 18\nStats:\n  -hp: 40\n  -speed: 56\n"
        "Types:\n  -normal\n  -flying\n"
    )


def test_inspect_uncaught(config):
    with pytest.raises(CommandError, match="you have not caught that pokemon"):
        command_inspect(config, "pidgey")


def test_pokedex(config, capsys):
    with pytest.raises(CommandError, match="Empty Pokedex"):
        command_pokedex(config, "")
    config.pokedex["pidgey"] = Pokemon(name="pidgey")
    config.pokedex["onix"] = Pokemon(name="onix")
    command_pokedex(config, "")
    assert capsys.readouterr().out == "Your pokedex:\n - pidgey\n - onix\n"


def test_start_repl_runs_until_eof(config, capsys):
    start_repl(config, io.StringIO("bogus\n\nPOKEDEX\ninspect  Pidgey\n"))
    out = capsys.readouterr().out
    assert out == (
        "Pokedex > Unknown command\n"
        "Pokedex > Unknown command\n"
        "Pokedex > Empty Pokedex, catch something first.\n"
        "Pokedex > you have not caught that pokemon\n"
        "Pokedex > No more inputs, exiting...\n"
    )


def test_start_repl_exit(config, capsys):
    with pytest.raises(SystemExit):
        start_repl(config, io.StringIO("exit\nhelp\n"))
    assert capsys.readouterr().out == "Pokedex > Closing the Pokedex... Goodbye!\n"


def test_main_empty_input(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert repl.main([]) == 0
    assert capsys.readouterr().out == "Pokedex > No more inputs, exiting...\n"