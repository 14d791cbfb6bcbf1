import copy
import logging
from enum import Enum, auto


logger = logging.getLogger(__name__)


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()


class FieldBase(object):
    '''Anything declared as class attribute of a Chunk: the declaration is a
    prototype and every chunk instance gets its own copy of it.'''

    def create(self, father):
        instance = copy.deepcopy(self)
        instance.father = father
        return instance


class FieldDescriptor(object):
    """Hand out, per chunk instance, the copy of the prototype field.

    Assigning to the attribute sets the value of the field, it doesn't
    replace the field itself."""

    def __init__(self, prototype: FieldBase, name: str):
        prototype.name = name
        self.prototype = prototype
        self.name = name

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.name}={self.prototype!r})>'

    def __get__(self, instance, owner=None):
        if instance is None:
            return self.prototype

        fields = instance.__dict__

        if self.name not in fields:
            logger.debug("instancing field '%s' for %s", self.name, instance.__class__.__name__)
            fields[self.name] = self.prototype.create(father=instance)

        return fields[self.name]

    def __set__(self, instance, value):
        self.__get__(instance).value = value


def _shadowed(bases, name):
    '''True if a base class already uses the name for something that is not a field.'''
    for base in bases:
        for klass in base.__mro__:
            if name in klass.__dict__:
                return not isinstance(klass.__dict__[name], FieldDescriptor)

    return False


class MetaChunk(type):
    '''Turn the FieldBase class attributes into descriptors and remember their
    order in `_fields`: it's the order they are unpacked and packed in.

    Fields of the base chunks come first.'''

    def __new__(mcs, name, bases, attrs):
        inherited = []
        for base in bases:
            inherited += [_ for _ in getattr(base, '_fields', []) if _ not in inherited]

        declared = []
        for attr_name, value in list(attrs.items()):
            if not isinstance(value, FieldBase):
                continue

            if _shadowed(bases, attr_name):
                raise AttributeError(f'field {attr_name} is already present in class {name}')

            attrs[attr_name] = FieldDescriptor(value, attr_name)
            declared.append(attr_name)

        new_cls = super().__new__(mcs, name, bases, attrs)
        new_cls._fields = [_ for _ in inherited if _ not in declared] + declared

        logger.debug('chunk %s has fields %s', name, new_cls._fields)

        return new_cls
