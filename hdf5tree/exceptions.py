class DecodeException(Exception):
    '''Base class to extend in order to throw exception in hdf5tree.

    It takes a message and the chain of the components (field names,
    array indexes, dataset and group names) that caused the exception;
    the chain is filled from the innermost component while the exception
    goes up.
    '''
    label = 'Failed to decode HDF5'

    def __init__(self, message='', chain=None):
        self.message = message
        self.chain = chain if chain is not None else []
        super().__init__(message)

    @property
    def path(self):
        path = ''
        for component in reversed(self.chain):
            if not path or component.startswith('['):
                path += component
            else:
                path += '.' + component

        return path

    def __str__(self):
        if not self.chain:
            return self.message

        return f'{self.message} (at {self.path})'


class SizeMismatchException(DecodeException):
    '''The declared size of a type disagrees with the bytes at hand.'''
    label = 'Size mismatch'

    def __init__(self, expected, actual, chain=None):
        self.expected = expected
        self.actual = actual
        super().__init__(f'expected {expected} bytes but got {actual}', chain=chain)


class EngineException(DecodeException):
    label = 'HDF5 engine error'


class UnsupportedInputException(DecodeException):
    label = 'Unsupported input'


class DuplicateFieldException(DecodeException):
    label = 'Duplicate field name'


class SchemaTooDeepException(DecodeException):
    '''This is useful when is not possible to trust the nesting of a schema.'''
    label = 'Schema too deep'
