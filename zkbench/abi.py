"""Program ABI descriptions and their signature-style rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence, Tuple, Union


class Sign(Enum):
    SIGNED = "signed"
    UNSIGNED = "unsigned"


class Visibility(Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    DATABUS = "databus"


@dataclass(frozen=True)
class FieldType:
    def __str__(self) -> str:
        return format_type(self)


@dataclass(frozen=True)
class BooleanType:
    def __str__(self) -> str:
        return format_type(self)


@dataclass(frozen=True)
class IntegerType:
    sign: Sign
    width: int

    def __str__(self) -> str:
        return format_type(self)


@dataclass(frozen=True)
class StringType:
    length: int

    def __str__(self) -> str:
        return format_type(self)


@dataclass(frozen=True)
class ArrayType:
    length: int
    typ: "AbiType"

    def __str__(self) -> str:
        return format_type(self)


@dataclass(frozen=True)
class TupleType:
    fields: Sequence["AbiType"] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))

    def __str__(self) -> str:
        return format_type(self)


@dataclass(frozen=True)
class StructType:
    path: str
    fields: Sequence[Tuple[str, "AbiType"]] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(tuple(f) for f in self.fields))

    def __str__(self) -> str:
        return format_type(self)


AbiType = Union[FieldType, BooleanType, IntegerType, StringType, ArrayType, TupleType, StructType]


@dataclass(frozen=True)
class AbiParameter:
    name: str
    typ: AbiType
    visibility: Visibility = Visibility.PRIVATE


@dataclass(frozen=True)
class Abi:
    parameters: Sequence[AbiParameter] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))

    def __str__(self) -> str:
        return format_abi(self)


def format_type(typ: AbiType) -> str:
    """Render a type in source-language syntax."""
    match typ:
        case FieldType():
            return "Field"
        case BooleanType():
            return "bool"
        case IntegerType(sign=Sign.SIGNED, width=width):
            return f"i{width}"
        case IntegerType(sign=Sign.UNSIGNED, width=width):
            return f"u{width}"
        case StringType(length=length):
            return f"str<{length}>"
        case ArrayType(length=length, typ=inner):
            return f"[{format_type(inner)}; {length}]"
        case TupleType(fields=fields):
            return "(" + ", ".join(format_type(t) for t in fields) + ")"
        case StructType(path=path, fields=fields):
            body = ", ".join(f"{name}: {format_type(t)}" for name, t in fields)
            return f"{path} {{{body}}}"
    raise TypeError(f"not an ABI type: {typ!r}")


_VISIBILITY_PREFIX = {
    Visibility.PUBLIC: "pub ",
    Visibility.PRIVATE: "",
    Visibility.DATABUS: "data_bus ",
}


def format_abi(abi: Abi) -> str:
    """Render the parameter list of an entry point."""
    params = (
        f"{p.name}: {_VISIBILITY_PREFIX[p.visibility]}{format_type(p.typ)}"
        for p in abi.parameters
    )
    return "(" + ", ".join(params) + ")"