import logging


def get_root_from_chunk(instance):
    while instance.father is not None:
        instance = instance.father

    return instance


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class Simple(Chunk):
            length = fields.StructField('I')
            data = fields.StringField(Dependency('.length'))

    and have the (internal) length of the string contained in the field named 'data'
    strictly connected to the field named 'length': unpacking reads it, setting a
    new value on 'data' writes its size back.

    The syntax for defining the expression is inspired from module resolution:

     - '.' indicates we refer to a field at the same level
     - otherwise the resolution starts from the root chunk
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        self.logger.debug('trying to resolve \'%s\' for \'%s\'' % (
            self.expression,
            instance.__class__.__name__,
        ))

        # '.miao'.split(".") -> ['', 'miao']
        # 'miao'.split(".") -> ['miao']
        fields_path = self.expression.split('.')

        if fields_path[0] != '':
            field = get_root_from_chunk(instance)
        else:  # we have a relative dependency
            field = instance.father
            fields_path = fields_path[1:]

        for component_name in fields_path:
            field = getattr(field, component_name)

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        value = self.resolve_field(instance).value

        self.logger.debug(' resolved with value %s' % value)

        return value

    def resolve_and_set(self, instance, value):
        real_field = self.resolve_field(instance)
        if not hasattr(real_field, 'value'):
            raise ValueError('something is wrong with the Dependency resolution!')
        real_field.value = value


class PropertyDescriptor(object):
    """This the glue for dependency management: the attribute can be a plain
    value of the given type or a Dependency resolved through the father."""

    def __init__(self, name: str, _type: type):
        self.name = name
        self.type = _type

    @property
    def cache_name(self):
        return f'_{self.name}_cache'

    def __get__(self, instance, owner):
        if instance is None:
            return self

        data = instance.__dict__
        if self.name not in data:
            raise AttributeError(f"no '{self.name}' here!")

        value = data[self.name]

        if isinstance(value, Dependency):
            # without a father there is nothing to resolve against
            if instance.father is None:
                return data.get(self.cache_name)

            return value.resolve(instance)

        return value

    def __set__(self, instance, value):
        if not isinstance(value, (self.type, Dependency)):
            raise ValueError(f"A property must be of type {self.type} or a Dependency")

        data = instance.__dict__

        # the first time we add without thinking much
        if self.name not in data or not isinstance(data[self.name], Dependency):
            data[self.name] = value
            return

        if isinstance(value, Dependency):
            data[self.name] = value
            return

        if instance.father is None:
            data[self.cache_name] = value
            return

        data[self.name].resolve_and_set(instance, value)
