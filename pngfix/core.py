"""
Core module for the abstraction of a file format

"""
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import (
    ChunkUnpackException,
    UnpackException,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: a Chunk is an
    ordered collection of fields, declared as class attributes, that are
    unpacked from a stream one after the other and packed back in the same order.

    A Chunk can contain sub-chunks.
    """

    def __init__(self, buffer=None, **kwargs):
        super().__init__(**kwargs)

        # now we have setup all the fields necessary and we can unpack if
        # some data is passed with the constructor
        if buffer is not None:
            self.logger.debug('unpacking \'%s\' from %d bytes' % (self.__class__.__name__, len(buffer)))
            self.unpack(Stream(buffer))

    def get_ordered_fields_name(self) -> List[str]:
        return self._fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    def init(self):
        for _, field in self.get_fields():
            field.init()

    def _get_value(self):
        return self

    def _set_value(self, value):
        raise AttributeError(f'you cannot set a value on {self.__class__.__name__}, set its fields')

    def _get_size(self):
        '''the size MUST be derived from the subchunks'''
        size = 0
        for _, field in self.get_fields():
            size += field.size

        return size

    def _get_raw(self):
        value = b''
        for field_name, field_instance in self.get_fields():
            field_raw = field_instance.raw
            self.logger.debug("field '%s' raw=%d bytes", field_name, len(field_raw))
            value += field_raw

        return value

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def unpack(self, stream):
        '''Take binary data from the stream and build the representation given by
        the class: each field reads from where the previous one stopped.

        A failure in a sub-field is re-raised as ChunkUnpackException with the
        path of the field appended to the chain.'''
        self.offset = stream.tell()

        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s at offset %d' % (self.__class__.__name__, field_name, stream.tell()))

            try:
                field.unpack(stream)
            except (UnpackException, ChunkUnpackException) as e:
                chain = e.chain if isinstance(e, ChunkUnpackException) else []
                chain.append(field_name)
                raise ChunkUnpackException(e.message, chain=chain) from e
