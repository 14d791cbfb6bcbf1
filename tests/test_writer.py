from pngfix.images.png import PNGChunk
from pngfix.images.png.writer import ChunkWriter, WriterAction

from pngbuilder import PNG_MAGIC, iter_chunks


def build(*tags):
    return [PNGChunk.build(tag, tag.lower()) for tag in tags]


def test_classify():
    chunks = build(b'CgBI', b'IHDR', b'IDAT', b'IDAT', b'IEND', b'tEXt')

    actions = [action for _, action in ChunkWriter().classify(chunks)]

    assert actions == [
        WriterAction.SUPPRESS_PRIVATE,
        WriterAction.EMIT,
        WriterAction.EMIT,
        WriterAction.SUPPRESS_DUPLICATE,
        WriterAction.EMIT,
    ]


def test_write():
    chunks = build(b'CgBI', b'IHDR', b'IDAT', b'tEXt', b'IDAT', b'IEND', b'IDAT')

    output = ChunkWriter().write(chunks)

    assert output.startswith(PNG_MAGIC)
    assert [_[0] for _ in iter_chunks(output)] == [b'IHDR', b'IDAT', b'tEXt', b'IEND']
    assert output == PNG_MAGIC + b''.join([chunks[_].pack() for _ in (1, 2, 3, 5)])


def test_write_empty_payload():
    output = ChunkWriter().write([PNGChunk.build(b'IEND')])

    assert output == PNG_MAGIC + b'\x00\x00\x00\x00IEND\xaeB`\x82'
