from enum import Enum, Flag, auto


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the output tree'''
    NONE         = 0
    UNIQUE_NAMES = 1 << 0


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()
    NETWORK       = auto()
    NATIVE        = auto()


class StringEncoding(Enum):
    ASCII   = 'ascii'
    UNICODE = 'utf-8'
