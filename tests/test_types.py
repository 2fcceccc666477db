import pytest

from hdf5tree.enum import Endianess, StringEncoding
from hdf5tree.types import (
    BooleanType,
    CompoundField,
    CompoundType,
    EnumType,
    FixedArrayType,
    FixedStringType,
    FloatType,
    IntegerType,
    UnsignedType,
    VarLenArrayType,
    VarLenStringType,
)


def test_scalar_sizes():
    for width in (1, 2, 4, 8):
        assert IntegerType(width).size == width
        assert UnsignedType(width).size == width
        assert EnumType(width, signed=True).size == width

    assert FloatType(4).size == 4
    assert FloatType(8).size == 8
    assert BooleanType().size == 1


def test_invalid_widths():
    with pytest.raises(ValueError):
        IntegerType(3)

    with pytest.raises(ValueError):
        FloatType(2)

    with pytest.raises(ValueError):
        EnumType(16, signed=False)


def test_formats():
    assert IntegerType(2).format == '=h'
    assert UnsignedType(8).format == '=Q'
    assert FloatType(4, endianess=Endianess.BIG_ENDIAN).format == '>f'
    assert BooleanType().format == '=?'
    assert EnumType(4, signed=False).format == '=I'


def test_enum_base():
    """The enum is only an integer with some names attached."""
    enum = EnumType(2, signed=False, members={'RED': 0, 'BLUE': 500})

    assert enum.base == UnsignedType(2)
    assert EnumType(1, signed=True).base == IntegerType(1)
    assert enum.members == {'RED': 0, 'BLUE': 500}


def test_strings_sizes():
    assert FixedStringType(10).size == 10
    assert FixedStringType(0, StringEncoding.UNICODE).size == 0
    # the slot contains only the indirection record
    assert VarLenStringType().size == 8
    assert VarLenArrayType(FloatType(8)).size == 16


def test_fixed_array_size():
    assert FixedArrayType(UnsignedType(2), 5).size == 10
    assert FixedArrayType(FixedArrayType(FloatType(8), 3), 2).size == 48
    assert FixedArrayType(IntegerType(4), 0).size == 0


def test_compound():
    compound = CompoundType(16, [
        CompoundField('a', 0, UnsignedType(4)),
        CompoundField('b', 8, FloatType(8)),
    ])

    # the padding counts
    assert compound.size == 16
    assert [_.name for _ in compound.fields] == ['a', 'b']
    assert compound.fields[1].end == 16


def test_compound_field_outside():
    with pytest.raises(ValueError):
        CompoundType(8, [CompoundField('a', 4, FloatType(8))])


def test_equality():
    assert IntegerType(4) == IntegerType(4)
    assert IntegerType(4) != UnsignedType(4)
    assert IntegerType(4) != IntegerType(4, endianess=Endianess.LITTLE_ENDIAN)
    assert VarLenArrayType(BooleanType()) == VarLenArrayType(BooleanType())
    assert CompoundType(4, [CompoundField('x', 0, FloatType(4))]) == \
        CompoundType(4, [CompoundField('x', 0, FloatType(4))])
    assert CompoundType(4, [CompoundField('x', 0, FloatType(4))]) != \
        CompoundType(4, [CompoundField('y', 0, FloatType(4))])
    assert 'UnsignedType' in repr(UnsignedType(2))
