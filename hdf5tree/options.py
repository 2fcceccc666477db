import os

from .enum import Compliant


DEFAULT_MAX_DEPTH = 64


class DecodeOptions(object):
    '''Knobs of a conversion.

    max_depth bounds the nesting of types and groups, compliant indicates
    what to do with duplicated names (see Compliant).'''

    def __init__(self, max_depth=DEFAULT_MAX_DEPTH, compliant=Compliant.UNIQUE_NAMES):
        if not isinstance(max_depth, int) or max_depth < 1:
            raise ValueError(f'max_depth must be a positive integer, not {max_depth!r}')
        self.max_depth = max_depth
        self.compliant = compliant

    def __repr__(self):
        return f'<{self.__class__.__name__}(max_depth={self.max_depth}, compliant={self.compliant!r})>'

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ

        value = environ.get('HDF5TREE_MAX_DEPTH', str(DEFAULT_MAX_DEPTH))
        try:
            max_depth = int(value)
        except ValueError:
            raise ValueError(f"HDF5TREE_MAX_DEPTH must be an integer, got '{value}'")

        compliant = Compliant.UNIQUE_NAMES
        if 'HDF5TREE_ALLOW_DUPLICATES' in environ:
            compliant &= ~Compliant.UNIQUE_NAMES

        return cls(max_depth=max_depth, compliant=compliant)
