"""The Skyscraper compression function over the BN254 scalar field.

Two variants are provided: one on plain 256-bit integers using Montgomery
squaring directly, and a reference one built on field elements.
"""

from __future__ import annotations

from typing import Callable, Sequence

from .fields import BN254, bn254_element, bn254_from_montgomery
from .hasher import Field, HashFn, HashKind, SmolHasher
from .mod_ring import ModRingElement, add_mod, square_redc

MODULUS = BN254.modulus
MOD_INV = BN254.mod_inv

ROUND_CONSTANTS: tuple[int, ...] = (
    17829420340877239108687448009732280677191990375576158938221412342251481978692,
    5852100059362614845584985098022261541909346143980691326489891671321030921585,
    17048088173265532689680903955395019356591870902241717143279822196003888806966,
    71577923540621522166602308362662170286605786204339342029375621502658138039,
    1630526119629192105940988602003704216811347521589219909349181656165466494167,
    7807402158218786806372091124904574238561123446618083586948014838053032654983,
    13329560971460034925899588938593812685746818331549554971040309989641523590611,
    16971509144034029782226530622087626979814683266929655790026304723118124142299,
)

SIGMA = 9915499612839321149637521777990102151350674507940716049588462388200839649614

_WORD_BYTES = 32


def _rotl8(v: int, n: int) -> int:
    return ((v << n) | (v >> (8 - n))) & 0xFF


def sbox(v: int) -> int:
    """The Skyscraper byte substitution."""
    if not 0 <= v <= 0xFF:
        raise ValueError("sbox input must be a byte")
    return _rotl8(v ^ (_rotl8(~v & 0xFF, 1) & _rotl8(v, 2) & _rotl8(v, 3)), 1)


_SBOX_TABLE = bytes(sbox(v) for v in range(256))


def reduce(n: int) -> int:
    """Reduce a non-negative integer modulo the BN254 scalar field modulus."""
    if n < 0:
        raise ValueError("value must be non-negative")
    return n % MODULUS


def square(n: int) -> int:
    """Montgomery square ``n^2 / R mod p``, the Skyscraper squaring layer."""
    return square_redc(n, MODULUS, MOD_INV)


def _bar_raw(n: int) -> int:
    """Swap the 16-byte halves of ``n`` and substitute every byte."""
    data = n.to_bytes(_WORD_BYTES, "little")
    rotated = data[16:] + data[:16]
    return int.from_bytes(rotated.translate(_SBOX_TABLE), "little")


def bar(n: int) -> int:
    """The Skyscraper byte-wise non-linear layer, reduced into the field."""
    return reduce(_bar_raw(n))


def _add(*terms: int) -> int:
    total = terms[0]
    for term in terms[1:]:
        total = add_mod(total, term, MODULUS)
    return total


_LAYERS: tuple[Callable[[int], int], ...] = (
    square, bar, bar, square, square, bar, bar, square,
)


def compress(left: int, right: int) -> int:
    """Compress two reduced field values into one."""
    a = left
    left, right = _add(right, square(left)), left
    for rc, layer in zip(ROUND_CONSTANTS, _LAYERS):
        left, right = _add(right, layer(left), rc), left
    left = _add(right, square(left))
    return _add(left, a)


_SIGMA_ELEMENT = bn254_element(SIGMA)
_RC_ELEMENTS = tuple(bn254_element(rc) for rc in ROUND_CONSTANTS)


def square_element(a: ModRingElement) -> ModRingElement:
    """Squaring layer on field elements: ``a^2 * sigma``."""
    return a.square() * _SIGMA_ELEMENT


def bar_element(a: ModRingElement) -> ModRingElement:
    """Byte-wise non-linear layer on field elements."""
    value = _bar_raw(a.to_uint())
    while value > MODULUS:
        value -= MODULUS
    return bn254_element(value)


_ELEMENT_LAYERS: tuple[Callable[[ModRingElement], ModRingElement], ...] = (
    square_element, bar_element, bar_element, square_element,
    square_element, bar_element, bar_element, square_element,
)


def compress_elements(left: ModRingElement, right: ModRingElement) -> ModRingElement:
    """Compress two field elements into one."""
    a = left
    left, right = right + square_element(left), left
    for rc, layer in zip(_RC_ELEMENTS, _ELEMENT_LAYERS):
        left, right = right + layer(left) + rc, left
    left = right + square_element(left)
    return left + a


def _split(message: bytes) -> Sequence[bytes]:
    return message[:_WORD_BYTES], message[_WORD_BYTES:]


class Skyscraper(SmolHasher):
    """Skyscraper on plain integers."""

    implementation = "ruint"
    field = Field.BN254

    @property
    def hash_fn(self) -> HashFn:
        return HashFn(HashKind.SKYSCRAPER, 1)

    def hash(self, messages: bytes) -> bytes:
        out = bytearray()
        for message in self._chunks(messages):
            left, right = (reduce(int.from_bytes(half, "little")) for half in _split(message))
            out += compress(left, right).to_bytes(_WORD_BYTES, "little")
        return bytes(out)


def _element_from_bytes(data: bytes) -> ModRingElement:
    raw = bytearray(data)
    raw[31] = 0  # Force below the modulus.
    return bn254_from_montgomery(int.from_bytes(raw, "little"))


class SkyscraperReference(SmolHasher):
    """Skyscraper on field elements."""

    implementation = "reference"
    field = Field.BN254

    @property
    def hash_fn(self) -> HashFn:
        return HashFn(HashKind.SKYSCRAPER, 1)

    def hash(self, messages: bytes) -> bytes:
        out = bytearray()
        for message in self._chunks(messages):
            left, right = (_element_from_bytes(half) for half in _split(message))
            result = compress_elements(left, right)
            out += result.as_montgomery().to_bytes(_WORD_BYTES, "little")
        return bytes(out)