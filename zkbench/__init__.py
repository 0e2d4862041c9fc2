"""Benchmarks of Keccak, Poseidon2 and Skyscraper hashes, BN254 field arithmetic and a small R1CS toolkit."""

__version__ = "0.1.0"