import numpy as np
import pytest

from hdf5tree.command import FromHdf5, LabeledError, SIGNATURE, from_hdf5
from hdf5tree.options import DecodeOptions


def test_signature():
    signatures = FromHdf5().signature()

    assert signatures == [SIGNATURE]
    assert SIGNATURE.name == 'from hdf5'
    assert SIGNATURE.input_type == 'binary'
    assert SIGNATURE.output_type == 'any'


def test_run(make_image):
    def populate(f):
        f['x'] = np.array([1, 2, 3], dtype='i8')

    image = make_image(populate)

    assert FromHdf5().run('from hdf5', None, image) == {'x': [1, 2, 3]}
    assert from_hdf5(bytearray(image)) == {'x': [1, 2, 3]}
    assert from_hdf5(memoryview(image)) == {'x': [1, 2, 3]}


def test_non_binary_input():
    """A string is not something to try to decode."""
    with pytest.raises(LabeledError) as excinfo:
        from_hdf5('/tmp/file.h5')

    assert excinfo.value.label == 'Unsupported input'
    assert 'str' in excinfo.value.msg


def test_garbage_input():
    with pytest.raises(LabeledError) as excinfo:
        FromHdf5().run('from hdf5', None, b'\x00' * 64)

    assert excinfo.value.label == 'HDF5 engine error'


def test_options_reach_the_decoder(make_image):
    def populate(f):
        f.create_group('a').create_group('b').create_group('c')

    image = make_image(populate)

    assert from_hdf5(image) == {'a': {'b': {'c': {}}}}

    with pytest.raises(LabeledError) as excinfo:
        FromHdf5(options=DecodeOptions(max_depth=2)).run('from hdf5', None, image)

    assert excinfo.value.label == 'Schema too deep'
    assert 'a.b.c' in excinfo.value.msg


def test_unknown_command():
    with pytest.raises(LabeledError):
        FromHdf5().run('from json', None, b'')
