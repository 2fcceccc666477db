import pytest

from hdf5tree.exceptions import EngineException
from hdf5tree.heap import Heap


def test_store_resolve():
    heap = Heap()

    first = heap.store(b'kebab')
    second = heap.store(bytearray(b'\x01\x02'))

    assert first != second
    assert len(heap) == 2
    assert heap.resolve(first) == b'kebab'
    assert heap.resolve(second) == b'\x01\x02'


def test_null_token():
    heap = Heap()

    assert heap.store(b'') == 0
    assert heap.resolve(0) == b''
    assert len(heap) == 0


def test_dangling_token():
    heap = Heap()
    token = heap.store(b'data')
    heap.clear()

    with pytest.raises(EngineException):
        heap.resolve(token)

    with pytest.raises(EngineException):
        heap.resolve(0xdead)
