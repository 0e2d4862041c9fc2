import pytest

from zkbench import registry
from zkbench.hasher import HASH_SIZE, MESSAGE_SIZE, HashFn, HashKind, SmolHasher
from zkbench.keccak import KeccakApi


class _Dummy(SmolHasher):
    implementation = "dummy"

    @property
    def hash_fn(self):
        return HashFn(HashKind.SHA256)

    def hash(self, messages):
        return bytes(len(messages) // 2)


def test_builtin_hashers_are_registered():
    labels = {str(h.hash_fn) for h in registry.hashers()}
    assert {"keccak:24", "poseidon2:2", "poseidon2:3", "skyscraper:1"} <= labels


def test_hashers_are_constructed_fresh():
    first = registry.hashers()
    second = registry.hashers()
    assert len(first) == len(second)
    assert all(a is not b for a, b in zip(first, second))


def test_registered_keccak_hashes():
    keccak = next(h for h in registry.hashers() if isinstance(h, KeccakApi))
    assert len(keccak.hash(bytes(MESSAGE_SIZE))) == HASH_SIZE


def test_register_appends_and_returns_factory(monkeypatch):
    monkeypatch.setattr(registry, "_factories", [])
    assert registry.register(_Dummy) is _Dummy
    built = registry.hashers()
    assert len(built) == 1
    assert isinstance(built[0], _Dummy)


def test_register_preserves_order(monkeypatch):
    monkeypatch.setattr(registry, "_factories", [])
    registry.register(_Dummy)
    registry.register(KeccakApi)
    assert [type(h) for h in registry.hashers()] == [_Dummy, KeccakApi]


def test_empty_registry(monkeypatch):
    monkeypatch.setattr(registry, "_factories", [])
    assert registry.hashers() == []


@pytest.mark.parametrize("kind", [HashKind.KECCAK, HashKind.POSEIDON2, HashKind.SKYSCRAPER])
def test_each_kind_present(kind):
    assert any(h.hash_fn.kind is kind for h in registry.hashers())