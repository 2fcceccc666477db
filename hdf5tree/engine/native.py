'''
Glue between the numpy/h5py datatypes and the type descriptors.

The dtypes h5py reports are mapped to descriptors and the values h5py reads
are laid out as native bytes: the variable-length payloads go in the heap and
the buffer receives the indirection records pointing to them.
'''
import logging
import struct

import h5py
import numpy

from ..enum import StringEncoding
from ..exceptions import EngineException
from ..heap import Heap
from ..types import (
    BooleanType,
    CompoundField,
    CompoundType,
    EnumType,
    FixedArrayType,
    FixedStringType,
    FloatType,
    INTEGER_WIDTHS,
    FLOAT_WIDTHS,
    IntegerType,
    TypeDescriptor,
    UnsignedType,
    VarLenArrayType,
    VarLenStringType,
    VARLEN_ARRAY_FORMAT,
    VARLEN_STRING_FORMAT,
)


logger = logging.getLogger(__name__)


def descriptor_from_dtype(dtype) -> TypeDescriptor:
    '''Map a dtype as reported by h5py to the corresponding descriptor.

    The checks on strings come first since h5py encodes them as
    variable-length (or 'S') dtypes with some metadata attached.'''
    dtype = numpy.dtype(dtype)

    string = h5py.check_string_dtype(dtype)
    if string is not None:
        encoding = StringEncoding.UNICODE if string.encoding == 'utf-8' else StringEncoding.ASCII
        if string.length is None:
            return VarLenStringType(encoding)
        return FixedStringType(string.length, encoding)

    base = h5py.check_vlen_dtype(dtype)
    if base is not None:
        return VarLenArrayType(descriptor_from_dtype(base))

    members = h5py.check_enum_dtype(dtype)
    if members is not None:
        return EnumType(dtype.itemsize, dtype.kind == 'i', members)

    if dtype.subdtype is not None:
        base, shape = dtype.subdtype
        return FixedArrayType(descriptor_from_dtype(base), int(numpy.prod(shape)))

    if dtype.names is not None:
        fields = []
        for name in dtype.names:
            field_dtype, offset = dtype.fields[name][:2]
            fields.append(CompoundField(name, offset, descriptor_from_dtype(field_dtype)))

        if not any(has_varlen(_.type) for _ in fields):
            return CompoundType(dtype.itemsize, fields)

        # numpy keeps an object pointer where we want an indirection record,
        # the fields are laid out again one after the other
        offset = 0
        for field in fields:
            field.offset = offset
            offset += field.type.size

        return CompoundType(offset, fields)

    if dtype.kind == 'b':
        return BooleanType()
    if dtype.kind == 'i' and dtype.itemsize in INTEGER_WIDTHS:
        return IntegerType(dtype.itemsize)
    if dtype.kind == 'u' and dtype.itemsize in INTEGER_WIDTHS:
        return UnsignedType(dtype.itemsize)
    if dtype.kind == 'f' and dtype.itemsize in FLOAT_WIDTHS:
        return FloatType(dtype.itemsize)

    raise EngineException(f"datatype '{dtype}' is not supported")


def has_varlen(descriptor: TypeDescriptor) -> bool:
    if isinstance(descriptor, (VarLenStringType, VarLenArrayType)):
        return True
    if isinstance(descriptor, FixedArrayType):
        return has_varlen(descriptor.element)
    if isinstance(descriptor, CompoundType):
        return any(has_varlen(_.type) for _ in descriptor.fields)

    return False


def _as_bytes(value, encoding=StringEncoding.UNICODE) -> bytes:
    if isinstance(value, str):
        return value.encode(encoding.value)

    return bytes(value)


def _pack_into(buffer, offset, value, descriptor, heap):
    if isinstance(descriptor, CompoundType):
        for field in descriptor.fields:
            _pack_into(buffer, offset + field.offset, value[field.name], field.type, heap)
    elif isinstance(descriptor, FixedArrayType):
        elements = numpy.asarray(value).reshape(-1)
        if len(elements) != descriptor.count:
            raise EngineException(f'array with {len(elements)} elements instead of {descriptor.count}')
        size = descriptor.element.size
        for index, element in enumerate(elements):
            _pack_into(buffer, offset + index * size, element, descriptor.element, heap)
    elif isinstance(descriptor, VarLenArrayType):
        elements = numpy.asarray(value).reshape(-1)
        token = heap.store(pack_elements(elements, descriptor.element, heap))
        struct.pack_into(VARLEN_ARRAY_FORMAT, buffer, offset, len(elements), token)
    elif isinstance(descriptor, VarLenStringType):
        token = heap.store(_as_bytes(value, descriptor.encoding) if value is not None else b'')
        struct.pack_into(VARLEN_STRING_FORMAT, buffer, offset, token)
    elif isinstance(descriptor, FixedStringType):
        raw = _as_bytes(value, descriptor.encoding)[:descriptor.length]
        buffer[offset:offset + descriptor.length] = raw.ljust(descriptor.length, b'\x00')
    else:
        struct.pack_into(descriptor.format, buffer, offset, value)


def pack_elements(elements, descriptor: TypeDescriptor, heap: Heap) -> bytes:
    '''Lay out the elements one after the other as native bytes.'''
    size = descriptor.size
    buffer = bytearray(len(elements) * size)
    for index, element in enumerate(elements):
        _pack_into(buffer, index * size, element, descriptor, heap)

    return bytes(buffer)


def native_bytes(array, descriptor: TypeDescriptor, heap: Heap) -> bytes:
    '''Return the elements of the array (one per row) in native byte order.

    Without variable-length members it's only a matter of casting to the
    native dtype, otherwise the values are packed one by one.'''
    if not has_varlen(descriptor):
        native = array.dtype.newbyteorder('=')
        return numpy.ascontiguousarray(array, dtype=native).tobytes()

    logger.debug('packing %d elements with variable-length members' % len(array))

    return pack_elements(array, descriptor, heap)
