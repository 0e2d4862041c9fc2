"""Rings of integers modulo an odd positive integer, using Montgomery form."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass

_LIMB_BITS = 64
_LIMB_MASK = (1 << _LIMB_BITS) - 1


def _limbs(modulus: int) -> int:
    """Number of 64-bit limbs needed to hold values below ``modulus``."""
    return max(1, -(-modulus.bit_length() // _LIMB_BITS))


def mul_redc(a: int, b: int, modulus: int, mod_inv: int) -> int:
    """Montgomery product ``a * b / R mod modulus`` with ``R = 2^(64 * limbs)``.

    ``mod_inv`` must be ``-1 / modulus mod 2^64`` and both inputs below ``modulus``.
    """
    t = a * b
    for _ in range(_limbs(modulus)):
        m = ((t & _LIMB_MASK) * mod_inv) & _LIMB_MASK
        t = (t + m * modulus) >> _LIMB_BITS
    return t - modulus if t >= modulus else t


def square_redc(a: int, modulus: int, mod_inv: int) -> int:
    """Montgomery square ``a^2 / R mod modulus``."""
    return mul_redc(a, a, modulus, mod_inv)


def add_mod(a: int, b: int, modulus: int) -> int:
    """Sum of two reduced values, reduced once."""
    total = a + b
    return total - modulus if total >= modulus else total


def inv_mod(value: int, modulus: int) -> int:
    """Multiplicative inverse of ``value`` modulo ``modulus``.

    Raises ZeroDivisionError if the value is not invertible.
    """
    try:
        return pow(value, -1, modulus)
    except ValueError:
        raise ZeroDivisionError(f"{value} is not invertible modulo {modulus}") from None


def ring_from_modulus(modulus: int) -> ModRing:
    """Compute the Montgomery parameters of the ring of integers modulo ``modulus``."""
    if modulus <= 0 or modulus % 2 == 0:
        raise ValueError("Modulus not an odd positive integer.")
    mod_inv = (-pow(modulus, -1, 1 << _LIMB_BITS)) & _LIMB_MASK
    bits = _LIMB_BITS * _limbs(modulus)
    montgomery_r = pow(2, bits, modulus)
    montgomery_r2 = montgomery_r * montgomery_r % modulus
    montgomery_r3 = mul_redc(montgomery_r2, montgomery_r2, modulus, mod_inv)
    return ModRing(
        modulus=modulus,
        montgomery_r=montgomery_r,
        montgomery_r2=montgomery_r2,
        montgomery_r3=montgomery_r3,
        mod_inv=mod_inv,
    )


@dataclass(frozen=True, order=True)
class ModRing:
    """Ring of integers modulo an odd positive integer."""

    modulus: int
    montgomery_r: int  # R mod modulus
    montgomery_r2: int  # R^2, or R in Montgomery form
    montgomery_r3: int  # R^3, or R^2 in Montgomery form
    mod_inv: int  # -1 / modulus mod 2^64

    @property
    def bits(self) -> int:
        """Width of the Montgomery radix R in bits."""
        return _LIMB_BITS * _limbs(self.modulus)

    def mont_mul(self, a: int, b: int) -> int:
        """Montgomery multiplication in this ring."""
        return mul_redc(a, b, self.modulus, self.mod_inv)

    def mont_square(self, a: int) -> int:
        """Montgomery squaring in this ring."""
        return square_redc(a, self.modulus, self.mod_inv)

    def from_montgomery(self, value: int) -> ModRingElement:
        """Element whose Montgomery representation is ``value``."""
        if not 0 <= value < self.modulus:
            raise ValueError("value must be reduced modulo the ring modulus")
        return ModRingElement(self, value)

    def element(self, value: int) -> ModRingElement:
        """Element representing the integer ``value``, which must be reduced."""
        if not 0 <= value < self.modulus:
            raise ValueError("value must be reduced modulo the ring modulus")
        return self.from_montgomery(self.mont_mul(value, self.montgomery_r2))

    def zero(self) -> ModRingElement:
        return self.from_montgomery(0)

    def one(self) -> ModRingElement:
        return self.from_montgomery(self.montgomery_r)

    def random(self, rng: _random.Random | None = None) -> ModRingElement:
        """Element drawn from full-width random limbs reduced modulo the modulus."""
        source = rng if rng is not None else _random
        return self.from_montgomery(source.getrandbits(self.bits) % self.modulus)


@dataclass(frozen=True, order=True, repr=False)
class ModRingElement:
    """Element of a ModRing, stored in Montgomery form."""

    ring: ModRing
    value: int

    def _check_ring(self, other: ModRingElement) -> None:
        if self.ring != other.ring:
            raise ValueError("elements belong to different rings")

    def as_montgomery(self) -> int:
        return self.value

    def to_uint(self) -> int:
        return self.ring.mont_mul(self.value, 1)

    def square(self) -> ModRingElement:
        return ModRingElement(self.ring, self.ring.mont_square(self.value))

    def pow(self, exponent: int) -> ModRingElement:
        """Small exponentiation by square-and-multiply; run time depends on the exponent."""
        if exponent < 0:
            raise ValueError("exponent must be non-negative")
        if exponent == 0:
            return self.ring.one()
        if exponent == 1:
            return self
        value = self.pow(exponent // 2).square()
        return value * self if exponent % 2 == 1 else value

    def pow_ct(self, exponent: int) -> ModRingElement:
        """Exponentiation that performs the same operations for every bit of the exponent."""
        if exponent < 0:
            raise ValueError("exponent must be non-negative")
        result = self.ring.one()
        power = self
        for i in range(exponent.bit_length()):
            product = result * power
            if (exponent >> i) & 1:
                result = product
            power = power * power
        return result

    def inv(self) -> ModRingElement:
        """Multiplicative inverse; raises ZeroDivisionError if there is none."""
        value = inv_mod(self.value, self.ring.modulus)
        return self.ring.from_montgomery(self.ring.mont_mul(value, self.ring.montgomery_r3))

    def __add__(self, other: object) -> ModRingElement:
        if not isinstance(other, ModRingElement):
            return NotImplemented
        self._check_ring(other)
        return ModRingElement(self.ring, add_mod(self.value, other.value, self.ring.modulus))

    def __radd__(self, other: object) -> ModRingElement:
        # Lets the builtin sum() start from its integer zero.
        if isinstance(other, int) and other == 0:
            return self
        return NotImplemented

    def __sub__(self, other: object) -> ModRingElement:
        if not isinstance(other, ModRingElement):
            return NotImplemented
        return self + (-other)

    def __mul__(self, other: object) -> ModRingElement:
        if not isinstance(other, ModRingElement):
            return NotImplemented
        self._check_ring(other)
        return ModRingElement(self.ring, self.ring.mont_mul(self.value, other.value))

    def __rmul__(self, other: object) -> ModRingElement:
        if isinstance(other, int) and other == 1:
            return self
        return NotImplemented

    def __neg__(self) -> ModRingElement:
        if self.value == 0:
            return self
        return ModRingElement(self.ring, self.ring.modulus - self.value)

    def __truediv__(self, other: object) -> ModRingElement:
        if not isinstance(other, ModRingElement):
            return NotImplemented
        self._check_ring(other)
        return self * other.inv()

    def __int__(self) -> int:
        return self.to_uint()

    def __str__(self) -> str:
        return str(self.to_uint())

    def __repr__(self) -> str:
        return f"ModRingElement({self.to_uint()})"

    def __format__(self, spec: str) -> str:
        return format(self.to_uint(), spec)