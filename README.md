# zkbench

Benchmarks that hash batches of 512-bit messages into 256-bit digests, the
step used to build a Merkle tree. Two kinds of hash are measured. Keccak
(SHA3-256 from the standard library) is a classic hash. Poseidon2 and
Skyscraper are zk-friendly hashes over the BN254 scalar field. Poseidon2 comes
with state widths 2 and 3. The package also has a small toolkit for rank-1
constraint systems (R1CS).

Everything is pure Python and needs no third-party packages. Python 3.10 or
newer is required.

## Installing

```
pip install .
```

## Running the benchmark

```
zkbench
zkbench --duration 0.5
```

The command builds every registered hasher and prints one row for each. The
registered hashers are `KeccakApi`, `Poseidon2T2`, `Poseidon2T3` and
`Skyscraper`.

A row starts with a fixed-width label: the hash function (for example
`poseidon2:3`), the implementation name and the field. After the label come
the columns for batch sizes of 4, 16, 64, 256 and 32768 random messages. Each
cell shows the best measured time per hash with an SI prefix, for example
`12.3μ`.

`--duration` gives the number of seconds spent measuring each cell. The
default is 0.01. A negative or non-finite value is rejected.

## Field arithmetic

`zkbench.mod_ring` works with integers modulo any odd positive modulus and
keeps values in Montgomery form. `ring_from_modulus(m)` computes the
parameters for a modulus. Elements support `+`, `-`, `*`, unary `-` and `/`,
plus `pow`, `pow_ct`, `inv`, `square`, `to_uint` and `as_montgomery`. If no
inverse exists, `inv` and `/` raise `ZeroDivisionError`.

`zkbench.fields` provides the BN254 scalar field as `BN254`:

```python
from zkbench.fields import bn254_element

x = bn254_element(5)
y = x.pow(5) + x * x - x
print(y.to_uint())
print((y / x).to_uint())
```

## Hashing

Every hasher is a `zkbench.hasher.SmolHasher`. Its `hash(messages)` method
takes concatenated 64-byte messages and returns concatenated 32-byte
digests. Input whose length is not a multiple of 64 raises `ValueError`.

```python
from zkbench.skyscraper import Skyscraper

digests = Skyscraper().hash(bytes(128))
assert len(digests) == 64
```

The hashers available:

- `zkbench.keccak.KeccakApi`: SHA3-256 of each message.
- `zkbench.poseidon2.Poseidon2T2` and `Poseidon2T3`: Poseidon2 with round
  constants drawn at random when the hasher is built. Pass a
  `random.Random` to make the constants reproducible.
- `zkbench.skyscraper.Skyscraper`: Skyscraper computed on plain integers.
- `zkbench.skyscraper.SkyscraperReference`: Skyscraper computed on field
  elements. It is not registered for the benchmark.

The Skyscraper building blocks are public functions: `sbox`, `square`,
`bar`, `compress`, and their field-element versions `square_element`,
`bar_element` and `compress_elements`.

## Registry and timing

- `zkbench.registry.hashers()` builds one fresh instance of every registered
  hasher.
- `register(factory)` adds a factory to the registry. It also works as a
  class decorator.
- `zkbench.bench.print_table(duration, hashers, out)` writes the benchmark
  table to any text stream.
- `zkbench.timing.measure(duration, func)` runs `func` repeatedly for
  `duration` seconds and returns the best time per call.
- `zkbench.timing.human(value, precision, alternate)` formats a number with
  an SI prefix:

```python
from zkbench.timing import human

human(0.000123)                  # '123\u202fμ'
human(0.000123, alternate=True)  # '123μ'
```

## R1CS

`zkbench.r1cs.R1CS` turns `AssertZero` opcodes into constraints. Each holds
an `Expression` of product terms, linear terms and a constant. Any other
opcode raises `UnsupportedOpcode`. `zkbench.solver` works with the result:

- `solve_witness` fills in a witness from the given assignments.
- `verify` checks a witness against every constraint.

Both raise `UnsolvableConstraint` on failure.

```python
from zkbench.fields import bn254_element
from zkbench.r1cs import R1CS, AssertZero, Expression
from zkbench.solver import solve_witness, verify

r1cs = R1CS()
# circuit witnesses: w0 * w1 - w2 == 0
r1cs.add_circuit([
    AssertZero(Expression(mul_terms=[(1, 0, 1)], linear_combinations=[(-1, 2)]))
])
witness = solve_witness(r1cs, {
    r1cs.remap[0]: bn254_element(3),
    r1cs.remap[1]: bn254_element(4),
})
print(witness[r1cs.remap[2]].to_uint())  # 12
print(verify(r1cs, witness))             # 2 constraints checked
```

`zkbench.sparse_matrix.SparseMatrix` is the matrix type that backs the
constraint system. `zkbench.solver.mat_mul` multiplies it by a vector.

`zkbench.abi.format_abi` renders the parameter list of an entry point:

```python
from zkbench.abi import Abi, AbiParameter, FieldType, IntegerType, Sign, Visibility, format_abi

abi = Abi([
    AbiParameter("a", FieldType()),
    AbiParameter("b", IntegerType(Sign.UNSIGNED, 32), Visibility.PUBLIC),
])
print(format_abi(abi))  # (a: Field, b: pub u32)
```

## What it does not do

- The benchmark covers only the four registered hashers. It has no SHA-256,
  BLAKE2s or BLAKE3 entries, and no hardware-accelerated, SIMD or GPU
  implementations.
- The R1CS toolkit builds circuits from Python objects only. It has no
  command and no reader for compiled program or witness files. Opcodes other
  than `AssertZero` are not supported.

## Tests

```
pip install .[test]
pytest
```