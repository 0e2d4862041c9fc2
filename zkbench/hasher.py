"""Common description and interface of the benchmarked hash functions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

MESSAGE_SIZE = 64
HASH_SIZE = 32


class Field(Enum):
    """Field a hash function operates over."""

    NONE = "none"
    BN254 = "bn254"
    GOLDILOCKS = "gold"
    M31 = "m31"

    def __str__(self) -> str:
        return self.value

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


class HashKind(Enum):
    """Family of a hash function."""

    SHA256 = "sha256"
    BLAKE2S = "blake2s"
    BLAKE3 = "blake3"
    POSEIDON = "poseidon"
    POSEIDON2 = "poseidon2"
    SKYSCRAPER = "skyscraper"
    MONOLITH = "monolith"
    RESCUE = "rescue"
    KECCAK = "keccak"

    @property
    def parameterised(self) -> bool:
        """Whether this family carries a width or round parameter."""
        return self not in (HashKind.SHA256, HashKind.BLAKE2S, HashKind.BLAKE3)


@dataclass(frozen=True)
class HashFn:
    """A hash function family together with its parameter, if it has one."""

    kind: HashKind
    width: int | None = None

    def __post_init__(self) -> None:
        if self.kind.parameterised and self.width is None:
            raise ValueError(f"{self.kind.value} requires a parameter")
        if not self.kind.parameterised and self.width is not None:
            raise ValueError(f"{self.kind.value} takes no parameter")

    def __str__(self) -> str:
        if self.width is None:
            return self.kind.value
        return f"{self.kind.value}:{self.width}"

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


class SmolHasher(ABC):
    """Hashes batches of 64-byte messages into 32-byte digests."""

    implementation: str = ""
    field: Field = Field.NONE

    @property
    @abstractmethod
    def hash_fn(self) -> HashFn:
        """The hash function this hasher computes."""

    @abstractmethod
    def hash(self, messages: bytes) -> bytes:
        """Hash concatenated 64-byte messages into concatenated 32-byte digests."""

    def describe(self) -> str:
        """Fixed-width label of hash function, implementation and field."""
        return f"{self.hash_fn:14}{self.implementation:10}{self.field:7}"

    @staticmethod
    def _chunks(messages: bytes, size: int = MESSAGE_SIZE) -> Iterator[bytes]:
        """Split ``messages`` into chunks of ``size`` bytes, requiring an exact fit."""
        if len(messages) % size:
            raise ValueError(f"message data must be a multiple of {size} bytes")
        view = memoryview(messages)
        for start in range(0, len(messages), size):
            yield bytes(view[start : start + size])