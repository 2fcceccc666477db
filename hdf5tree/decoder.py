"""
Decoding of a native byte buffer into plain python values, driven by a type
descriptor.

The output tree is made of int, float, bool, str, list and dict (the records,
in declaration order): every value is copied out of the buffer.
"""
import logging
import struct
from typing import Any, Iterable, Tuple

from .enum import Compliant
from .exceptions import (
    DecodeException,
    DuplicateFieldException,
    EngineException,
    SchemaTooDeepException,
    SizeMismatchException,
)
from .heap import Heap
from .options import DecodeOptions
from .types import (
    TypeDescriptor,
    VARLEN_ARRAY_FORMAT,
    VARLEN_STRING_FORMAT,
)


logger = logging.getLogger(__name__)


def make_record(pairs: Iterable[Tuple[str, Any]], compliant=Compliant.UNIQUE_NAMES) -> dict:
    '''Build a record from (name, value) couples keeping their order.

    With Compliant.UNIQUE_NAMES a repeated name is an error, otherwise the
    last value wins (and keeps the position of the first one).'''
    record = {}
    for name, value in pairs:
        if name in record:
            if compliant & Compliant.UNIQUE_NAMES:
                raise DuplicateFieldException(f"field named '{name}' is already present")
            logger.warning(f"field named '{name}' is duplicated, the last value wins")
        record[name] = value

    return record


def check_size(data: bytes, expected: int):
    if len(data) != expected:
        raise SizeMismatchException(expected, len(data))


class ValueDecoder(object):
    '''Turn a slice of native bytes into a value following a TypeDescriptor.

    Variable-length types are resolved against the heap the engine filled
    while materializing the buffer.'''

    def __init__(self, heap: Heap = None, options: DecodeOptions = None):
        self.logger = logging.getLogger(f"{self.__module__}.{self.__class__.__name__}")
        self.heap = heap
        self.options = options or DecodeOptions()

    def decode(self, data: bytes, descriptor: TypeDescriptor, depth=0) -> Any:
        if depth > self.options.max_depth:
            raise SchemaTooDeepException(f'nesting deeper than {self.options.max_depth} levels')

        method = getattr(self, 'decode_%s' % descriptor.kind, None)
        if method is None:
            raise EngineException(f"no decoder for type {descriptor!r}")

        return method(bytes(data), descriptor, depth)

    def decode_elements(self, data: bytes, descriptor: TypeDescriptor, count: int, depth=0) -> list:
        '''Decode count contiguous elements of the same type.'''
        size = descriptor.size
        check_size(data, count * size)

        values = []
        for index in range(count):
            try:
                values.append(self.decode(data[index * size:(index + 1) * size], descriptor, depth))
            except DecodeException as e:
                e.chain.append(f'[{index}]')
                raise

        return values

    def _unpack(self, data, descriptor):
        check_size(data, struct.calcsize(descriptor.format))
        return struct.unpack(descriptor.format, data)[0]

    def decode_integer(self, data, descriptor, depth):
        return self._unpack(data, descriptor)

    decode_unsigned = decode_integer

    def decode_float(self, data, descriptor, depth):
        return self._unpack(data, descriptor)

    def decode_boolean(self, data, descriptor, depth):
        return self._unpack(data, descriptor)

    def decode_enum(self, data, descriptor, depth):
        # the members are not resolved, we emit the backing value
        return self.decode(data, descriptor.base, depth)

    def decode_fixed_string(self, data, descriptor, depth):
        check_size(data, descriptor.length)
        return data.decode('utf-8', errors='replace')

    def _resolve(self, token):
        if self.heap is None:
            raise EngineException('variable-length value found but no heap to resolve it')

        return self.heap.resolve(token)

    def decode_varlen_string(self, data, descriptor, depth):
        check_size(data, descriptor.size)
        token, = struct.unpack(VARLEN_STRING_FORMAT, data)

        return self._resolve(token).decode(descriptor.encoding.value, errors='replace')

    def decode_fixed_array(self, data, descriptor, depth):
        return self.decode_elements(data, descriptor.element, descriptor.count, depth + 1)

    def decode_varlen_array(self, data, descriptor, depth):
        check_size(data, descriptor.size)
        length, token = struct.unpack(VARLEN_ARRAY_FORMAT, data)
        if length and not descriptor.element.size:
            raise EngineException(f'{length} elements of zero size in a variable-length array')
        payload = self._resolve(token)
        self.logger.debug('resolved token %d as %d elements (%d bytes)' % (token, length, len(payload)))

        return self.decode_elements(payload, descriptor.element, length, depth + 1)

    def _iter_fields(self, data, descriptor, depth):
        for field in descriptor.fields:
            self.logger.debug('decoding field %s at offset %d' % (field.name, field.offset))
            try:
                if field.end > len(data):
                    raise SizeMismatchException(field.end, len(data))
                value = self.decode(data[field.offset:field.end], field.type, depth + 1)
            except DecodeException as e:
                e.chain.append(field.name)
                raise

            yield field.name, value

    def decode_compound(self, data, descriptor, depth):
        check_size(data, descriptor.size)

        return make_record(self._iter_fields(data, descriptor, depth), compliant=self.options.compliant)


def decode(data: bytes, descriptor: TypeDescriptor, heap: Heap = None, options: DecodeOptions = None) -> Any:
    return ValueDecoder(heap=heap, options=options).decode(data, descriptor)
