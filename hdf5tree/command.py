"""
The command exposed to the host shell: it takes binary data and returns
whatever the image contains.

Everything going wrong below is converted here into a LabeledError, a short
label plus a message, that's the only kind of exception crossing this
boundary.
"""
import logging

from .builder import decode_container
from .exceptions import DecodeException, UnsupportedInputException
from .options import DecodeOptions


logger = logging.getLogger(__name__)

BINARY_TYPES = (bytes, bytearray, memoryview)


class LabeledError(Exception):

    def __init__(self, label, msg):
        self.label = label
        self.msg = msg
        super().__init__(f'{label}: {msg}')


class CommandSignature(object):

    def __init__(self, name, usage, input_type, output_type, category='formats'):
        self.name = name
        self.usage = usage
        self.input_type = input_type
        self.output_type = output_type
        self.category = category

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.name!r}: {self.input_type} -> {self.output_type})>'


SIGNATURE = CommandSignature(
    name='from hdf5',
    usage='Convert from HDF5 binary into table',
    input_type='binary',
    output_type='any',
)


def from_hdf5(value, options: DecodeOptions = None):
    try:
        if not isinstance(value, BINARY_TYPES):
            raise UnsupportedInputException(
                f"'{SIGNATURE.name}' expects binary input, got {value.__class__.__name__}")

        return decode_container(bytes(value), options=options)
    except DecodeException as e:
        logger.error(f'{e.label}: {e}')
        raise LabeledError(e.label, str(e)) from e


class FromHdf5(object):
    '''Plugin object as the host wants it: a list of signatures and a
    run() dispatching on the command name.'''

    def __init__(self, options: DecodeOptions = None):
        self.options = options

    def signature(self):
        return [SIGNATURE]

    def run(self, name, call, input):
        if name != SIGNATURE.name:
            raise LabeledError('Unknown command', f"this plugin doesn't provide '{name}'")

        return from_hdf5(input, options=self.options)
