"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable from a stream.
"""
import logging
import struct
from enum import Enum

from .meta import FieldBase, Endianess
from .properties import Dependency, PropertyDescriptor
from .exceptions import UnpackException, MagicException


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, father=None, default=None, endianess=Endianess.LITTLE_ENDIAN, is_magic=False):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = None
        self.endianess = endianess
        self.is_magic = is_magic

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def get_dependencies(self):
        """Return the dictionary containing as key the attribute depending on other fields"""
        instance_dict = self.__dict__
        return {_k: _v for _k, _v in instance_dict.items() if isinstance(_v, Dependency)}

    def _get_value(self):
        return self._value

    def _set_value(self, value) -> None:
        self._value = value

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_raw() not implemented")

    raw = property(
        fget=lambda self: self._get_raw(),
    )

    def pack(self) -> bytes:
        return self.raw

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.

    The main advantage is the possibility to indicate via the "enum" argument some subclass
    of enum.Enum so to have directly a representation of the integer value of the field itself.
    """

    def __init__(self, format, default=0, enum=None, **kw):
        self.format = format
        self.enum = enum
        super().__init__(default=default, **kw)

    def _get_encoder(self):
        return str if isinstance(self.value, (bytes, Enum)) else hex

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self._get_encoder()(self.value))

    def value_from_default(self):
        if not self.enum:
            return super().value_from_default()

        return self.enum(self.default)

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _get_raw(self) -> bytes:
        return struct.pack(self.get_format(), self.value if not self.enum else self.value.value)

    def _unpack_struct(self, raw: bytes) -> int:
        try:
            unpacked_value = struct.unpack(self.get_format(), raw)[0]
        except struct.error as e:
            raise UnpackException(str(e))

        return unpacked_value

    def _unpack_enum(self, value: int) -> Enum:
        try:
            return self.enum(value)
        except ValueError:
            raise UnpackException(f'enum {self.enum.__name__} doesn\'t have element with value 0x{value:x} in it')

    def _unpack(self, raw):
        value = self._unpack_struct(raw)
        if self.enum:
            value = self._unpack_enum(value)

        if self.is_magic and value != self.value_from_default():
            raise MagicException(f'magic mismatch: {value!r}')

        return value

    def unpack(self, stream):
        self.offset = stream.tell()
        self.value = self._unpack(stream.read_exact(self.size))


class StringField(Field):
    """Represent a contiguous chunk of bytes.

    The length can be a Dependency: in that case setting a value with a different
    size updates the field the length depends on."""

    length = PropertyDescriptor('length', int)

    def __init__(self, n=None, **kw):
        if n is None and kw.get('default') is None:
            raise ValueError("StringField must have 'n' or 'default' indicated!")

        self.length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def __len__(self):
        return len(self.value)

    def value_from_default(self):
        if self.default is not None:
            return self.default

        return b'\x00' * (self.length or 0)

    def _get_size(self):
        return len(self.value)

    def _set_value(self, value) -> None:
        if not isinstance(value, bytes):
            raise ValueError(f'{self.__class__.__name__} accepts only bytes, not {value.__class__.__name__}')

        length = len(value)
        if 'length' not in self.get_dependencies() and length != self.length:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self.length} bytes)')

        self._value = value
        self.length = length

    def _get_raw(self):
        return self.value

    def unpack(self, stream):
        self.offset = stream.tell()
        value = stream.read_exact(self.length)

        if self.is_magic and value != self.default:
            raise MagicException(f'magic mismatch: {value!r}')

        self.value = value
