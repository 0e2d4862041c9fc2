"""Poseidon2 permutations of width 2 and 3 over the BN254 scalar field."""

from __future__ import annotations

import operator
import random
from functools import reduce
from typing import Iterable, Sequence

from .fields import BN254, bn254_from_montgomery
from .hasher import Field, HashFn, HashKind, SmolHasher
from .mod_ring import ModRingElement

FULL_ROUNDS_HALF = 4
PARTIAL_ROUNDS = 56
SBOX_DEGREE = 5

_Constants = tuple[tuple[ModRingElement, ...], ...]


def _mix(state: list[ModRingElement]) -> list[ModRingElement]:
    total = reduce(operator.add, state)
    return [x + total for x in state]


def _element_from_bytes(data: bytes) -> ModRingElement:
    raw = bytearray(data)
    raw[31] = 0  # Force below the modulus.
    return bn254_from_montgomery(int.from_bytes(raw, "little"))


def _full_constants(rng: random.Random | None, width: int) -> _Constants:
    return tuple(
        tuple(BN254.random(rng) for _ in range(width)) for _ in range(FULL_ROUNDS_HALF)
    )


def _partial_constants(rng: random.Random | None) -> tuple[ModRingElement, ...]:
    return tuple(BN254.random(rng) for _ in range(PARTIAL_ROUNDS))


def _full_round(
    state: list[ModRingElement], constants: Iterable[ModRingElement]
) -> list[ModRingElement]:
    state = [(x + rc).pow(SBOX_DEGREE) for x, rc in zip(state, constants)]
    return _mix(state)


def _permute(
    state: Iterable[ModRingElement],
    width: int,
    first: _Constants,
    middle: Sequence[ModRingElement],
    last: _Constants,
) -> list[ModRingElement]:
    state = list(state)
    if len(state) != width:
        raise ValueError(f"state must hold {width} elements")
    state = _mix(state)
    for constants in first:
        state = _full_round(state, constants)
    for rc in middle:
        state[0] = (state[0] + rc).pow(SBOX_DEGREE)
        total = reduce(operator.add, state)
        # Internal matrix: the last lane carries an extra doubling.
        state[-1] = state[-1] + state[-1]
        state = [x + total for x in state]
    for constants in last:
        state = _full_round(state, constants)
    return state


class _Poseidon2Bn254(SmolHasher):
    """Common labels of the Poseidon2 hashers."""

    width = 2
    implementation = "ruint"
    field = Field.BN254

    @property
    def hash_fn(self) -> HashFn:
        return HashFn(HashKind.POSEIDON2, self.width)

    def _digest(self, messages: bytes) -> bytes:
        out = bytearray()
        padding = [BN254.zero()] * (self.width - 2)
        for message in self._chunks(messages):
            state = [
                _element_from_bytes(message[:32]),
                _element_from_bytes(message[32:]),
                *padding,
            ]
            result = self.permute(state)[0]
            out += result.as_montgomery().to_bytes(32, "little")
        return bytes(out)


class Poseidon2T2(_Poseidon2Bn254):
    """Poseidon2 of width 2 with random round constants."""

    width = 2

    def __init__(self, rng: random.Random | None = None) -> None:
        self.first = _full_constants(rng, self.width)
        self.middle = _partial_constants(rng)
        self.last = _full_constants(rng, self.width)

    def permute(self, state: Iterable[ModRingElement]) -> list[ModRingElement]:
        """Return the permuted state; the input is left unchanged."""
        return _permute(state, self.width, self.first, self.middle, self.last)

    def hash(self, messages: bytes) -> bytes:
        return self._digest(messages)


class Poseidon2T3(_Poseidon2Bn254):
    """Poseidon2 of width 3 with random round constants; the third lane starts at zero."""

    width = 3

    def __init__(self, rng: random.Random | None = None) -> None:
        self.first = _full_constants(rng, self.width)
        self.middle = _partial_constants(rng)
        self.last = _full_constants(rng, self.width)

    def permute(self, state: Iterable[ModRingElement]) -> list[ModRingElement]:
        """Return the permuted state; the input is left unchanged."""
        return _permute(state, self.width, self.first, self.middle, self.last)

    def hash(self, messages: bytes) -> bytes:
        return self._digest(messages)