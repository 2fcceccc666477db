'''
Engine backed by h5py: the image is opened from memory, without touching the
filesystem.
'''
import io
import logging
from contextlib import contextmanager

import h5py
import numpy

from . import Engine
from .native import descriptor_from_dtype, native_bytes
from ..exceptions import DecodeException, EngineException
from ..types import TypeDescriptor


# h5py raises a little of everything when the image is corrupted
H5PY_ERRORS = (OSError, KeyError, ValueError, TypeError, RuntimeError)


class H5pyEngine(Engine):

    def __init__(self):
        super().__init__()
        self.logger = logging.getLogger(f"{self.__module__}.{self.__class__.__name__}")

    @contextmanager
    def open(self, data):
        self.logger.debug('opening image of %d bytes' % len(data))
        try:
            handle = h5py.File(io.BytesIO(data), 'r')
        except H5PY_ERRORS as e:
            raise EngineException(f'failed to open the image: {e}') from e

        try:
            yield handle
        finally:
            handle.close()
            self.heap.clear()

    def _children(self, group, cls):
        try:
            return [_ for _ in group.values() if isinstance(_, cls)]
        except H5PY_ERRORS as e:
            raise EngineException(f"failed to list the children of '{group.name}': {e}") from e

    def datasets(self, group):
        return self._children(group, h5py.Dataset)

    def groups(self, group):
        return self._children(group, h5py.Group)

    def name(self, node):
        # the name is the full path, the leaf is what we want
        return (node.name or '').rsplit('/', 1)[-1]

    def dtype(self, dataset):
        try:
            dtype = dataset.dtype
        except H5PY_ERRORS as e:
            raise EngineException(f"failed to read the datatype of '{dataset.name}': {e}") from e

        return descriptor_from_dtype(dtype)

    def size(self, dataset):
        if dataset.shape is None:  # null dataspace
            return 0

        return int(numpy.prod(dataset.shape))

    def _read(self, dataset):
        count = self.size(dataset)
        if count == 0:
            return numpy.empty((0,) + dataset.dtype.shape, dtype=dataset.dtype.base)

        raw = dataset[()]
        if dataset.shape == ():
            array = numpy.empty((1,) + dataset.dtype.shape, dtype=dataset.dtype.base)
            array[0] = raw
            return array

        return raw.reshape((count,) + dataset.dtype.shape)

    def read_native_bytes(self, dataset, descriptor: TypeDescriptor):
        self.logger.debug('reading %s as %r' % (dataset.name, descriptor))
        try:
            array = self._read(dataset)
            return native_bytes(array, descriptor, self.heap)
        except DecodeException:
            raise
        except H5PY_ERRORS as e:
            raise EngineException(f"failed to read '{dataset.name}': {e}") from e
