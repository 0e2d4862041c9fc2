import pytest

from zkbench.abi import (
    Abi,
    AbiParameter,
    ArrayType,
    BooleanType,
    FieldType,
    IntegerType,
    Sign,
    StringType,
    StructType,
    TupleType,
    Visibility,
    format_abi,
    format_type,
)


def test_scalar_types():
    assert format_type(FieldType()) == "Field"
    assert format_type(BooleanType()) == "bool"


def test_unsigned_integer():
    assert format_type(IntegerType(Sign.UNSIGNED, 32)) == "u32"


def test_signed_integer_prefix():
    text = format_type(IntegerType(Sign.SIGNED, 8))
    assert text.startswith("i")
    assert text[1:] == "8"


def test_string_contains_length():
    text = format_type(StringType(5))
    assert text.startswith("str<")
    assert text.endswith(">")
    assert "5" in text


def test_array():
    assert format_type(ArrayType(3, FieldType())) == "[Field; 3]"


def test_tuple_lists_members():
    text = format_type(TupleType([FieldType(), BooleanType()]))
    assert text[0] == "(" and text[-1] == ")"
    assert text[1:-1].split(", ") == ["Field", "bool"]


def test_struct_renders_named_fields():
    text = format_type(StructType("Point", [("x", FieldType()), ("y", BooleanType())]))
    assert text.startswith("Point {")
    assert text.endswith("}")
    assert "x: Field" in text and "y: bool" in text


def test_str_delegates_to_format_type():
    typ = ArrayType(2, IntegerType(Sign.UNSIGNED, 8))
    assert str(typ) == format_type(typ)


def test_abi_with_visibilities():
    abi = Abi(
        [
            AbiParameter("a", FieldType(), Visibility.PUBLIC),
            AbiParameter("b", BooleanType(), Visibility.PRIVATE),
        ]
    )
    assert format_abi(abi) == "(a: pub Field, b: bool)"


def test_databus_prefix():
    abi = Abi([AbiParameter("d", FieldType(), Visibility.DATABUS)])
    assert "data_bus " in format_abi(abi)
    assert "pub" not in format_abi(abi)


def test_empty_abi_matches_empty_tuple():
    assert format_abi(Abi([])) == format_type(TupleType([]))


def test_unknown_type_rejected():
    with pytest.raises(TypeError):
        format_type("Field")