'''
Knobs of a conversion.

The defaults are generous for images coming out of an iOS bundle; both bounds
exist to stop corrupted files from making us loop or allocate without limit.
'''
import os
from enum import Enum

from .enum import Compliant


MAX_CHUNKS = 1024
BUFSIZE = 64 * 1024 * 1024  # 64MB


class IDATPolicy(Enum):
    '''What to do when there is more than one IDAT chunk.

    FIRST recompresses every IDAT on its own and only the first one is written:
    it works when the first chunk contains the whole image.

    MERGE treats the concatenation of all the IDAT chunks as a single deflate
    stream, as the PNG specification says, and writes it back in the first one.'''
    FIRST = 'first'
    MERGE = 'merge'


def _is_true(value):
    return value.lower() in ('1', 'yes', 'true', 'on')


class Config(object):

    def __init__(self, max_chunks=MAX_CHUNKS, bufsize=BUFSIZE, idat_policy=IDATPolicy.FIRST,
                 compliant=Compliant.NONE, verify=False):
        for name, value in (('max_chunks', max_chunks), ('bufsize', bufsize)):
            if not isinstance(value, int) or value <= 0:
                raise ValueError(f'{name} must be a positive integer, not {value!r}')

        self.max_chunks = max_chunks
        self.bufsize = bufsize
        self.idat_policy = IDATPolicy(idat_policy)
        self.compliant = compliant
        self.verify = verify

    def __repr__(self):
        return '<%s(max_chunks=%d, bufsize=%d, idat_policy=%s, compliant=%s, verify=%s)>' % (
            self.__class__.__name__,
            self.max_chunks,
            self.bufsize,
            self.idat_policy.value,
            self.compliant,
            self.verify,
        )

    @classmethod
    def from_environ(cls, environ=None):
        '''Build a configuration from the PNGFIX_* environment variables.'''
        environ = os.environ if environ is None else environ
        kwargs = {}

        if 'PNGFIX_MAX_CHUNKS' in environ:
            kwargs['max_chunks'] = int(environ['PNGFIX_MAX_CHUNKS'])
        if 'PNGFIX_BUFSIZE' in environ:
            kwargs['bufsize'] = int(environ['PNGFIX_BUFSIZE'])
        if 'PNGFIX_IDAT' in environ:
            kwargs['idat_policy'] = IDATPolicy(environ['PNGFIX_IDAT'].lower())
        if _is_true(environ.get('PNGFIX_CHECK_CRC', '')):
            kwargs['compliant'] = Compliant.CRC

        kwargs['verify'] = _is_true(environ.get('PNGFIX_VERIFY', ''))

        return cls(**kwargs)
