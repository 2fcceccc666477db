import io

import h5py
import pytest


@pytest.fixture
def make_image():
    """Return a function building an HDF5 image in memory: it takes a callable
    receiving the (writable) root group and returns the bytes of the file."""
    def _make(populate):
        fh = io.BytesIO()
        with h5py.File(fh, 'w') as f:
            populate(f)

        return fh.getvalue()

    return _make
