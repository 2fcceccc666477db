import logging

from .exceptions import EngineException
from .types import NULL_TOKEN


logger = logging.getLogger(__name__)


class Heap(object):
    '''Storage for the payloads of the variable-length values.

    The native buffers produced by the engine contain only tokens referring
    to the payloads here: resolving a token returns a copy of the payload,
    so nothing decoded aliases the storage.'''

    def __init__(self):
        self._payloads = {}
        self._next_token = NULL_TOKEN + 1

    def __len__(self):
        return len(self._payloads)

    def store(self, payload: bytes) -> int:
        if not payload:
            return NULL_TOKEN

        token = self._next_token
        self._next_token += 1
        self._payloads[token] = bytes(payload)

        return token

    def resolve(self, token: int) -> bytes:
        if token == NULL_TOKEN:
            return b''

        try:
            return self._payloads[token]
        except KeyError:
            logger.error('dangling indirection record with token %d' % token)
            raise EngineException(f'indirection record refers to unknown token {token}')

    def clear(self):
        self._payloads.clear()
