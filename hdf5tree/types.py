"""
The type descriptors: a closed set of classes describing the binary layout of
a buffer, one for each kind of datatype the container can hold.

A descriptor has no behaviour beyond telling its size in bytes, that is
exactly the number of bytes the decoder consumes for a value of it.

Variable-length types don't hold their payload inline: the slot contains an
indirection record, a token into the heap owned by the engine

    string: [token: uint64]
    array:  [length: uint64][token: uint64]

the token zero is the null record.
"""
import struct
from typing import Dict, List, Optional

from .enum import Endianess, StringEncoding


VARLEN_STRING_FORMAT = '=Q'
VARLEN_ARRAY_FORMAT = '=QQ'

NULL_TOKEN = 0

INTEGER_WIDTHS = {
    1: 'b',
    2: 'h',
    4: 'i',
    8: 'q',
}

FLOAT_WIDTHS = {
    4: 'f',
    8: 'd',
}

ENDIANESS_PREFIXES = {
    Endianess.LITTLE_ENDIAN: '<',
    Endianess.BIG_ENDIAN: '>',
    Endianess.NETWORK: '!',
    Endianess.NATIVE: '=',
}


class TypeDescriptor(object):
    """Base class to subclass from"""
    kind = None

    def _get_size(self) -> int:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _key(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._key() not implemented")

    def __eq__(self, other):
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self):
        return hash((self.__class__.__name__, self._key()))

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, ', '.join(repr(_) for _ in self._key()))


class ScalarType(TypeDescriptor):
    '''Fixed width value directly unpackable with the struct module.'''

    def __init__(self, width, endianess=Endianess.NATIVE):
        self.width = width
        self.endianess = endianess

    def _get_size(self):
        return self.width

    def _get_code(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_code() not implemented")

    @property
    def format(self):
        return '%s%s' % (ENDIANESS_PREFIXES[self.endianess], self._get_code())

    def _key(self):
        return (self.width, self.endianess)


class IntegerType(ScalarType):
    kind = 'integer'

    def __init__(self, width, **kwargs):
        if width not in INTEGER_WIDTHS:
            raise ValueError(f'integer width must be one of {sorted(INTEGER_WIDTHS)}, not {width}')
        super().__init__(width, **kwargs)

    def _get_code(self):
        return INTEGER_WIDTHS[self.width]


class UnsignedType(IntegerType):
    kind = 'unsigned'

    def _get_code(self):
        return INTEGER_WIDTHS[self.width].upper()


class FloatType(ScalarType):
    kind = 'float'

    def __init__(self, width, **kwargs):
        if width not in FLOAT_WIDTHS:
            raise ValueError(f'float width must be one of {sorted(FLOAT_WIDTHS)}, not {width}')
        super().__init__(width, **kwargs)

    def _get_code(self):
        return FLOAT_WIDTHS[self.width]


class BooleanType(ScalarType):
    kind = 'boolean'

    def __init__(self, **kwargs):
        super().__init__(1, **kwargs)

    def _get_code(self):
        return '?'


class EnumType(ScalarType):
    '''Enumerated value backed by an integer: only the backing value is
    decoded, the members are kept for reference.'''
    kind = 'enum'

    def __init__(self, width, signed, members: Optional[Dict[str, int]] = None, **kwargs):
        if width not in INTEGER_WIDTHS:
            raise ValueError(f'enum width must be one of {sorted(INTEGER_WIDTHS)}, not {width}')
        super().__init__(width, **kwargs)
        self.signed = signed
        self.members = dict(members or {})

    @property
    def base(self) -> IntegerType:
        cls = IntegerType if self.signed else UnsignedType
        return cls(self.width, endianess=self.endianess)

    def _get_code(self):
        return self.base._get_code()

    def _key(self):
        return (self.width, self.signed, self.endianess)


class FixedStringType(TypeDescriptor):
    kind = 'fixed_string'

    def __init__(self, length, encoding=StringEncoding.ASCII):
        if length < 0:
            raise ValueError(f'string length cannot be negative ({length})')
        self.length = length
        self.encoding = encoding

    def _get_size(self):
        return self.length

    def _key(self):
        return (self.length, self.encoding)


class VarLenStringType(TypeDescriptor):
    kind = 'varlen_string'

    def __init__(self, encoding=StringEncoding.UNICODE):
        self.encoding = encoding

    def _get_size(self):
        return struct.calcsize(VARLEN_STRING_FORMAT)

    def _key(self):
        return (self.encoding,)


class FixedArrayType(TypeDescriptor):
    kind = 'fixed_array'

    def __init__(self, element: TypeDescriptor, count: int):
        if count < 0:
            raise ValueError(f'array count cannot be negative ({count})')
        self.element = element
        self.count = count

    def _get_size(self):
        return self.count * self.element.size

    def _key(self):
        return (self.element, self.count)


class VarLenArrayType(TypeDescriptor):
    kind = 'varlen_array'

    def __init__(self, element: TypeDescriptor):
        self.element = element

    def _get_size(self):
        return struct.calcsize(VARLEN_ARRAY_FORMAT)

    def _key(self):
        return (self.element,)


class CompoundField(object):
    '''A named member of a compound type placed at a given offset.'''

    def __init__(self, name: str, offset: int, type: TypeDescriptor):
        self.name = name
        self.offset = offset
        self.type = type

    @property
    def end(self):
        return self.offset + self.type.size

    def __eq__(self, other):
        return isinstance(other, CompoundField) and \
            (self.name, self.offset, self.type) == (other.name, other.offset, other.type)

    def __hash__(self):
        return hash((self.name, self.offset, self.type))

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.name!r}, {self.offset}, {self.type!r})>'


class CompoundType(TypeDescriptor):
    '''Struct-like type: the size includes the padding, so it can be larger
    than the sum of the fields.'''
    kind = 'compound'

    def __init__(self, size: int, fields: List[CompoundField]):
        for field in fields:
            if field.offset < 0 or field.end > size:
                raise ValueError(
                    f"field '{field.name}' at [{field.offset}, {field.end}) doesn't fit a compound of {size} bytes")
        self._size = size
        self.fields = list(fields)

    def _get_size(self):
        return self._size

    def _key(self):
        return (self._size, tuple(self.fields))
