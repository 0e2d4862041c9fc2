"""SHA3-256 over 64-byte messages using the standard library."""

from __future__ import annotations

import hashlib

from .hasher import HashFn, HashKind, SmolHasher

KECCAK_ROUNDS = 24


class KeccakApi(SmolHasher):
    """SHA3-256, one digest per 64-byte message."""

    @property
    def hash_fn(self) -> HashFn:
        return HashFn(HashKind.KECCAK, KECCAK_ROUNDS)

    def hash(self, messages: bytes) -> bytes:
        return b"".join(
            hashlib.sha3_256(message).digest() for message in self._chunks(messages)
        )