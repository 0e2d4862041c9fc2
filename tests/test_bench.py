import io

import pytest

from zkbench import bench, registry
from zkbench.hasher import HASH_SIZE, MESSAGE_SIZE, HashFn, HashKind, SmolHasher


class _Recording(SmolHasher):
    implementation = "fake"

    def __init__(self):
        self.sizes = set()

    @property
    def hash_fn(self):
        return HashFn(HashKind.BLAKE3)

    def hash(self, messages):
        self.sizes.add(len(messages))
        return bytes(len(messages) // MESSAGE_SIZE * HASH_SIZE)


def _table(hashers):
    out = io.StringIO()
    bench.print_table(0.0005, hashers, out)
    return out.getvalue().split("\n")


def test_header_lines():
    lines = _table([])
    assert lines[0] == "seconds per hash for batches of 512 bit messages."
    assert lines[1].startswith("hash \\ batch size")
    assert lines[1].split("\t")[1:] == [str(n) for n in bench.LENGTHS]


def test_row_per_hasher():
    hasher = _Recording()
    lines = _table([hasher])
    row = lines[2]
    assert row.startswith(hasher.describe())
    assert len(row.split("\t")) == len(bench.LENGTHS) + 1
    assert lines[3] == ""


def test_all_batch_sizes_are_hashed():
    hasher = _Recording()
    _table([hasher])
    assert hasher.sizes == {n * MESSAGE_SIZE for n in bench.LENGTHS}


def test_lengths_match_source():
    out = io.StringIO()
    bench.print_table(0.0005, [], out)
    header = out.getvalue().split("\n")[1]
    assert header.split("\t")[1:] == ["4", "16", "64", "256", "32768"]


def test_main_runs_registered_hashers(monkeypatch, capsys):
    monkeypatch.setattr(registry, "_factories", [_Recording])
    assert bench.main(["--duration", "0.0005"]) == 0
    output = capsys.readouterr().out
    assert _Recording().describe() in output


def test_main_rejects_negative_duration(monkeypatch):
    monkeypatch.setattr(registry, "_factories", [])
    with pytest.raises(SystemExit):
        bench.main(["--duration", "-1"])


def test_main_rejects_non_number():
    with pytest.raises(SystemExit):
        bench.main(["--duration", "abc"])