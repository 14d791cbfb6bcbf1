import io
import logging

from pngfix.compression import deflate
from pngfix.config import BUFSIZE
from pngfix.exceptions import VerifyException

from . import IHDRData, PNGChunkType


logger = logging.getLogger(__name__)


def get_chunk_by_name(chunks, name):
    chunk = list(filter(lambda x: x.type.value.decode('latin1') == name, chunks))

    if len(chunk) == 0:
        raise ValueError(f'no chunk with name {name}')

    return chunk if len(chunk) > 1 else chunk[0]


def get_header(chunks) -> IHDRData:
    header = get_chunk_by_name(chunks, PNGChunkType.IHDR.name)
    if isinstance(header, list):
        raise ValueError('more than one IHDR chunk')

    return IHDRData(header.data.value)


def get_IDAT_data(chunks, capacity=BUFSIZE):
    '''In a PNG file, the concatenation of the contents of all the IDAT chunks makes up a zlib datastream,
    the boundaries between IDAT chunks are arbitrary and can fall anywhere in the zlib datastream.
    '''
    chunks = filter(lambda x: x.is_type(PNGChunkType.IDAT), chunks)

    data = b''.join([chunk.data.value for chunk in chunks])

    return deflate.inflate(data, capacity)


def verify_png(data: bytes):
    '''Ask Pillow to decode the whole image: a PNG it can't load is not
    what we promised.'''
    from PIL import Image

    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            logger.debug('verified %s image %dx%d', image.mode, image.width, image.height)
            return image.size
    except (OSError, SyntaxError, ValueError) as e:
        raise VerifyException(f'Pillow cannot decode the result: {e}') from e
