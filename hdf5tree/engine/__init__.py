'''
# Container engine

The engine is the component that understands the container itself: it opens
an image from bytes, walks its groups and datasets and materializes the
elements of a dataset as native bytes for a given type descriptor.

The tree builder uses only the interface below, so that it's possible to
plug a different engine (the tests use one living in memory).
'''
from contextlib import contextmanager
from typing import Iterator, List

from ..heap import Heap
from ..types import TypeDescriptor


class Engine(object):
    '''Interface to subclass from.

    An instance represents a single conversion: the heap is where the
    payloads of the variable-length values are stored while reading.'''

    def __init__(self):
        self.heap = Heap()

    @contextmanager
    def open(self, data: bytes) -> Iterator[object]:
        '''Yield the root group of the image, the handle must not outlive the block.'''
        raise NotImplementedError(f"method {self.__class__.__name__}.open() not implemented")
        yield

    def datasets(self, group) -> List[object]:
        raise NotImplementedError(f"method {self.__class__.__name__}.datasets() not implemented")

    def groups(self, group) -> List[object]:
        raise NotImplementedError(f"method {self.__class__.__name__}.groups() not implemented")

    def name(self, node) -> str:
        raise NotImplementedError(f"method {self.__class__.__name__}.name() not implemented")

    def dtype(self, dataset) -> TypeDescriptor:
        raise NotImplementedError(f"method {self.__class__.__name__}.dtype() not implemented")

    def size(self, dataset) -> int:
        raise NotImplementedError(f"method {self.__class__.__name__}.size() not implemented")

    def read_native_bytes(self, dataset, descriptor: TypeDescriptor) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}.read_native_bytes() not implemented")
