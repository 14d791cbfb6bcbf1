class PNGFixException(Exception):
    '''Base class to extend in order to throw exception in pngfix.

    It takes an optional argument that represents the chain of the fields
    that caused the exception; when the failure is about a specific chunk
    of the file its position and type are carried along.
    '''

    def __init__(self, message='', chain=None, index=None, chunk_type=None):
        self.message = message
        self.chain = chain if chain is not None else []
        self.index = index
        self.chunk_type = chunk_type
        super().__init__(message)

    def __str__(self):
        msg = self.message
        if self.index is not None:
            if self.chunk_type is None:
                msg = f'chunk #{self.index}: {msg}'
            else:
                tag = self.chunk_type.decode('latin1') if isinstance(self.chunk_type, bytes) else self.chunk_type
                msg = f'chunk #{self.index} ({tag}): {msg}'
        if self.chain:
            msg = f'{msg} [{".".join(reversed(self.chain))}]'

        return msg


class UnpackException(PNGFixException):
    pass


class AllocationException(UnpackException):
    '''A read would be larger than what the stream allows.'''
    pass


class MagicException(PNGFixException):
    pass


class ChunkUnpackException(PNGFixException):
    pass


class InputFormatException(PNGFixException):
    '''The input doesn't start with the PNG signature.'''
    pass


class StructuralException(PNGFixException):
    '''The chunk stream is unterminated, truncated or declares absurd lengths.'''
    pass


class ChecksumException(StructuralException):
    pass


class CompressionException(PNGFixException):
    pass


class InputException(PNGFixException):
    pass


class OutputException(PNGFixException):
    pass


class VerifyException(PNGFixException):
    pass
