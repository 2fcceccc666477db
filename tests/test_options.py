import pytest

from hdf5tree.enum import Compliant
from hdf5tree.options import DEFAULT_MAX_DEPTH, DecodeOptions


def test_defaults():
    options = DecodeOptions()

    assert options.max_depth == DEFAULT_MAX_DEPTH
    assert options.compliant & Compliant.UNIQUE_NAMES


def test_invalid_max_depth():
    with pytest.raises(ValueError):
        DecodeOptions(max_depth=0)

    with pytest.raises(ValueError):
        DecodeOptions(max_depth='10')


def test_from_env():
    options = DecodeOptions.from_env({})

    assert options.max_depth == DEFAULT_MAX_DEPTH
    assert options.compliant == Compliant.UNIQUE_NAMES

    options = DecodeOptions.from_env({
        'HDF5TREE_MAX_DEPTH': '8',
        'HDF5TREE_ALLOW_DUPLICATES': '1',
    })

    assert options.max_depth == 8
    assert not options.compliant & Compliant.UNIQUE_NAMES


def test_from_env_invalid():
    with pytest.raises(ValueError):
        DecodeOptions.from_env({'HDF5TREE_MAX_DEPTH': 'deep'})
