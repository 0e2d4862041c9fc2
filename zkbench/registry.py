"""Registry of the hash function implementations that are benchmarked."""

from __future__ import annotations

from typing import Callable, List

from .hasher import SmolHasher
from .keccak import KeccakApi
from .poseidon2 import Poseidon2T2, Poseidon2T3
from .skyscraper import Skyscraper

HasherFactory = Callable[[], SmolHasher]

_factories: List[HasherFactory] = []


def register(factory: HasherFactory) -> HasherFactory:
    """Add a hasher constructor to the registry; usable as a class decorator."""
    _factories.append(factory)
    return factory


def hashers() -> list[SmolHasher]:
    """Construct a fresh instance of every registered hasher, in registration order."""
    return [factory() for factory in _factories]


register(KeccakApi)
register(Poseidon2T2)
register(Poseidon2T3)
register(Skyscraper)