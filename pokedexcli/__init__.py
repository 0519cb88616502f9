"""Interactive command-line Pokedex backed by PokeAPI, with an expiring response cache."""

__version__ = "0.1.0"