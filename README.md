# pokedexcli

An interactive Pokedex in your terminal. You can page through location
areas, explore an area to see which Pokemon can be met there, try to
catch Pokemon and inspect the ones you have caught. The data comes from
the public PokeAPI over HTTP. Responses are kept in an in-memory cache
and dropped after about five minutes.

The package uses only the Python standard library and needs Python 3.10
or later.

## Installation

```
pip install .
```

## Usage

Start the prompt:

```
pokedexcli
```

`python -m pokedexcli.repl` starts the same prompt. The command takes no
options other than `--help`.

The prompt is `Pokedex > `. Each line is lower-cased and split on
whitespace. The first word is the command, and the remaining words,
joined by single spaces, are its argument.

| Command             | What it does                                                        |
|---------------------|---------------------------------------------------------------------|
| `help`              | Prints a welcome line and one usage line per command.               |
| `map`               | Prints the names on the next page of location areas.                |
| `mapb`              | Prints the names on the previous page of location areas.            |
| `explore <area>`    | Prints the Pokemon encountered in the named area.                   |
| `catch <pokemon>`   | Throws a Pokeball at the named Pokemon.                             |
| `inspect <pokemon>` | Prints the name, height, weight, stats and types of a caught one.   |
| `pokedex`           | Lists the Pokemon you have caught, in the order you caught them.    |
| `exit`              | Prints a goodbye and ends the program.                              |

An unknown command prints `Unknown command`. A failed request or a
command that cannot be carried out prints its error message, and the
prompt carries on. The session ends on `exit` or at end of input
(Ctrl-D), which prints `No more inputs, exiting...`.

The first `map` shows the first page. After each `map` or `mapb` the
prompt remembers the page's next and previous links. `mapb` on the first
page prints `You're on the first page`, and `map` on the last page
prints the same message.

A short session:

```
Pokedex > map
canalave-city-area
eterna-city-area
...
Pokedex > explore canalave-city-area
Exploring canalave-city-area...
Found Pokemon:
 - tentacool
 - ...
Pokedex > catch tentacool
Throwing a Pokeball at tentacool...
tentacool was caught!
You may now inspect it with the inspect command.
Pokedex > inspect tentacool
Name: tentacool
Height: 9
Weight: 455
Stats:
  -hp: 40
  ...
Types:
  -water
  -poison
```

### Catching

Catching is random. Each throw draws a number below twice the Pokemon's
base experience and succeeds when the number is at least the base
experience, so each throw has an even chance. The first failed throw at
a Pokemon is noted in the client's cache. A Pokemon that is already in
your Pokedex cannot be caught again. A Pokemon with no base experience
cannot be caught.

## Using it as a library

```python
from pokedexcli.pokeapi import Client

client = Client(timeout=30, cache_interval=300)
page = client.get_location_area(None)
for area in page.results:
    print(area.name)

pikachu = client.get_pokemon("pikachu")
print(pikachu.base_experience, [t.name for t in pikachu.types])
client.close()
```

- `pokedexcli.pokeapi.Client` has `get_location_area(url)`,
  `get_area(area_name)`, `get_pokemon(pokemon_name)` and `close()`. It
  returns the frozen dataclasses `LocationAreaPage`, `Area` and
  `Pokemon`, whose nested values are `NamedResource`, `PokemonStat` and
  `PokemonType`. Raw response bodies are cached by URL in `client.cache`.
- Failed requests, empty names and responses that cannot be decoded
  raise `pokedexcli.pokeapi.PokeAPIError`.
- `pokedexcli.cache.Cache(interval)` is a standalone, thread-safe cache of
  byte values. It has `add`, `get` (which returns `None` for a missing
  key), `reap(now)`, `close`, `len()` and `in`. A background thread drops
  entries older than `interval` seconds. It can also be used as a
  context manager, which stops that thread on exit.
- `pokedexcli.repl` holds the prompt: `start_repl(config, stdin)`,
  `Config`, `get_commands()`, `clean_input(text)`, the `command_*`
  functions, and `CommandError` for commands that cannot be carried out.

## What it does not do

The Pokedex lives only in memory. Caught Pokemon are not saved, and a new
session starts empty. The cache is not kept on disk either.

## Running the tests

```
pip install ".[test]"
pytest
```