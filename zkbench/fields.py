"""The BN254 scalar field."""

from __future__ import annotations

from .mod_ring import ModRing, ModRingElement

BN254 = ModRing(
    modulus=21888242871839275222246405745257275088548364400416034343698204186575808495617,
    montgomery_r=6350874878119819312338956282401532410528162663560392320966563075034087161851,
    montgomery_r2=944936681149208446651664254269745548490766851729442924617792859073125903783,
    montgomery_r3=5866548545943845227489894872040244720403868105578784105281690076696998248512,
    mod_inv=14042775128853446655,
)


def bn254_element(value: int) -> ModRingElement:
    """BN254 element representing the reduced integer ``value``."""
    return BN254.element(value)


def bn254_from_montgomery(value: int) -> ModRingElement:
    """BN254 element whose Montgomery representation is ``value``."""
    return BN254.from_montgomery(value)