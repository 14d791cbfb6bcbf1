import pytest

from pngfix.core import Chunk
from pngfix.exceptions import ChunkUnpackException
from pngfix.fields import StructField, StringField
from pngfix.properties import Dependency


def test_chunk():
    """Check that building a Chunk from fields behaves correctly."""
    class Dummy(Chunk):
        a = StructField('I', default=0xbad)
        b = StringField(0x10)
        c = StructField('I', default=0xdeadbeef)

    dummy = Dummy()

    assert dummy.get_ordered_fields_name() == ['a', 'b', 'c']

    assert dummy.a.size == 4
    assert dummy.a.raw == b'\xad\x0b\x00\x00'
    assert dummy.a.value == 0xbad
    assert dummy.a.father is dummy

    assert dummy.b.size == 0x10
    assert dummy.b.raw == b'\x00' * 0x10

    assert dummy.c.raw == b'\xef\xbe\xad\xde'

    assert dummy.size == 0x18
    assert len(dummy.raw) == dummy.size
    assert dummy.pack() == (
        b'\xad\x0b\x00\x00' +
        b'\x00' * 0x10 +
        b'\xef\xbe\xad\xde'
    )


def test_chunk_instances_are_independent():
    class Dummy(Chunk):
        a = StructField('I')

    first, second = Dummy(), Dummy()
    first.a.value = 1

    assert second.a.value == 0
    assert first.a is not second.a


def test_chunk_unpack_layout():
    class Dummy(Chunk):
        a = StructField('H')
        b = StringField(3)
        c = StructField('B')

    dummy = Dummy(b'\x01\x00abc\xff')

    assert dummy.a.value == 1
    assert dummy.b.value == b'abc'
    assert dummy.c.value == 0xff
    assert dummy.layout == {
        'a': (0, 2),
        'b': (2, 3),
        'c': (5, 1),
    }


def test_chunk_w_dependencies():
    class Example(Chunk):
        sz = StructField('I')
        data = StringField(Dependency('.sz'))

    example = Example()

    assert list(example.data.get_dependencies().keys()) == ['length']
    assert example.sz.value == 0
    assert example.data.value == b''

    example.data.value = b'kebab'

    assert example.sz.value == 5
    assert example.data.length == 5
    assert example.raw == b'\x05\x00\x00\x00kebab'


def test_chunk_w_dependencies_unpack():
    class Example(Chunk):
        sz = StructField('I')
        data = StringField(Dependency('.sz'))
        tail = StructField('B')

    example = Example(b'\x03\x00\x00\x00abc\x2a')

    assert example.data.value == b'abc'
    assert example.tail.value == 0x2a


def test_chunk_unpack_failure_chain():
    class Example(Chunk):
        sz = StructField('I')
        data = StringField(Dependency('.sz'))

    with pytest.raises(ChunkUnpackException) as e:
        Example(b'\x09\x00\x00\x00ab')

    assert e.value.chain == ['data']


def test_nested_chunk_failure_chain():
    class Inner(Chunk):
        number = StructField('I')

    class Outer(Chunk):
        magic = StringField(2)
        inner = Inner()

    outer = Outer(b'XY\x01\x00\x00\x00')
    assert outer.inner.number.value == 1
    assert outer.inner.father is outer

    with pytest.raises(ChunkUnpackException) as e:
        Outer(b'XY\x01')

    assert e.value.chain == ['number', 'inner']
    assert 'inner.number' in str(e.value)


def test_chunk_inheritance():
    class Base(Chunk):
        a = StructField('B')
        b = StructField('B')

    class Derived(Base):
        c = StructField('B')
        a = StructField('H')

    derived = Derived(b'\x01\x02\x03\x04\x00')

    assert Base().get_ordered_fields_name() == ['a', 'b']
    assert derived.get_ordered_fields_name() == ['b', 'c', 'a']
    assert (derived.b.value, derived.c.value, derived.a.value) == (1, 2, 0x0403)


def test_chunk_field_name_clash():
    with pytest.raises(AttributeError):
        class Broken(Chunk):
            value = StructField('I')


def test_chunk_field_assignment():
    class Dummy(Chunk):
        a = StructField('I')

    dummy = Dummy()
    field = dummy.a

    dummy.a = 0xcafe

    assert dummy.a is field
    assert dummy.a.value == 0xcafe
