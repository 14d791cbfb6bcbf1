import pytest

from pngbuilder import (
    CGBI_PAYLOAD,
    make_chunk,
    make_ihdr,
    make_png,
    raw_deflate,
)


PIXELS = bytes([0x10, 0x20, 0x30, 0x40])


@pytest.fixture
def pixels():
    return PIXELS


@pytest.fixture
def cgbi_png():
    '''signature, IHDR, CgBI, a single IDAT and IEND.'''
    return make_png(
        make_ihdr(1, 1),
        make_chunk(b'CgBI', CGBI_PAYLOAD),
        make_chunk(b'IDAT', raw_deflate(PIXELS)),
        make_chunk(b'IEND'),
    )


@pytest.fixture
def rgb_image():
    '''A 4x3 RGB image: returns the CgBI file and the pixels a decoder should find.'''
    width, height = 4, 3
    rows = [bytes([(x * 60 + y * 20) % 256 for x in range(width * 3)]) for y in range(height)]

    idat = b''.join([b'\x00' + row for row in rows])  # filter type None for each scanline

    png = make_png(
        make_chunk(b'CgBI', CGBI_PAYLOAD),
        make_ihdr(width, height),
        make_chunk(b'IDAT', raw_deflate(idat)),
        make_chunk(b'IEND'),
    )

    return png, b''.join(rows)
