import io
import logging

from .exceptions import UnpackException, AllocationException


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/file objects to uniform their
    properties: mainly we need a read_exact() that refuses short reads and
    reads larger than the configured bound.'''
    def __init__(self, obj, max_read=None):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self.obj = obj
        self._type = type(obj)
        self.max_read = max_read

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to stream' % self._type.__name__)

        init_method()

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __repr__(self):
        return '<%s(%s @ %d)>' % (self.__class__.__name__, self._type.__name__, self.obj.tell())

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_bytearray(self):
        self.obj = io.BytesIO(bytes(self.obj))

    def init_BytesIO(self):
        pass

    def read_exact(self, size):
        if self.max_read is not None and size > self.max_read:
            raise AllocationException(f'refusing to read {size} bytes (bound is {self.max_read})')

        offset = self.obj.tell()
        data = self.obj.read(size)

        if len(data) != size:
            raise UnpackException(f'wanted {size} bytes at offset {offset}, only {len(data)} available')

        return data

    def is_exhausted(self):
        position = self.obj.tell()
        is_exhausted = self.obj.read(1) == b''
        self.obj.seek(position)

        return is_exhausted
