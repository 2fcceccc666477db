"""
Composition of the output tree: a dataset becomes the list of its decoded
elements and a group becomes a record with a field for each child, first the
datasets and then the sub-groups, in the order the engine enumerates them.
"""
import logging

from .decoder import ValueDecoder, make_record
from .engine import Engine
from .exceptions import (
    DecodeException,
    EngineException,
    SchemaTooDeepException,
    SizeMismatchException,
)
from .options import DecodeOptions


logger = logging.getLogger(__name__)


def strip_name(name: str) -> str:
    if name.startswith('/'):
        return name[1:]

    return name


class TreeBuilder(object):

    def __init__(self, engine: Engine, options: DecodeOptions = None):
        self.logger = logging.getLogger(f"{self.__module__}.{self.__class__.__name__}")
        self.engine = engine
        self.options = options or DecodeOptions()
        self.decoder = ValueDecoder(heap=engine.heap, options=self.options)

    def build_dataset(self, dataset) -> list:
        descriptor = self.engine.dtype(dataset)
        count = self.engine.size(dataset)
        data = self.engine.read_native_bytes(dataset, descriptor)
        self.logger.debug('building dataset of %d elements of %r (%d bytes)' % (count, descriptor, len(data)))

        if len(data) != count * descriptor.size:
            raise SizeMismatchException(count * descriptor.size, len(data))

        values = self.decoder.decode_elements(data, descriptor, count)
        if len(values) != count:
            raise EngineException(f'decoded {len(values)} elements but the engine reported {count}')

        return values

    def _iter_children(self, group, depth):
        for dataset in self.engine.datasets(group):
            name = strip_name(self.engine.name(dataset))
            self.logger.debug("building dataset '%s'" % name)
            try:
                yield name, self.build_dataset(dataset)
            except DecodeException as e:
                e.chain.append(name)
                raise

        for subgroup in self.engine.groups(group):
            name = strip_name(self.engine.name(subgroup))
            self.logger.debug("building group '%s'" % name)
            try:
                yield name, self.build_group(subgroup, depth=depth + 1)
            except DecodeException as e:
                e.chain.append(name)
                raise

    def build_group(self, group, depth=0) -> dict:
        if depth > self.options.max_depth:
            raise SchemaTooDeepException(f'groups nested deeper than {self.options.max_depth} levels')

        return make_record(self._iter_children(group, depth), compliant=self.options.compliant)


def decode_container(data: bytes, engine: Engine = None, options: DecodeOptions = None) -> dict:
    '''Decode a whole image, starting from its root group.

    If no engine is passed a new h5py one is created, so that nothing is
    shared between two calls.'''
    if engine is None:
        from .engine.h5 import H5pyEngine
        engine = H5pyEngine()

    logger.debug('decoding container of %d bytes' % len(data))
    with engine.open(data) as root:
        return TreeBuilder(engine, options=options).build_group(root)


from_hdf5_bytes = decode_container
