'''
The conversion pipeline: signature check, then reader, processor and writer.

Everything happens in memory and any failure aborts the whole conversion:
the output file is created only when the output bytes are ready.
'''
import logging
import os

from .config import Config
from .exceptions import (
    ChunkUnpackException,
    InputException,
    InputFormatException,
    MagicException,
    OutputException,
)
from .images.png import PNGChunkType, PNGHeader, PNGInterlaceType
from .images.png.reader import ChunkReader
from .images.png.processor import ChunkProcessor
from .images.png.writer import ChunkWriter
from .images.png.utils import get_header, verify_png
from .streams import Stream


logger = logging.getLogger(__name__)

OUTPUT_MODE = 0o600


def check_png_header(stream):
    header = PNGHeader()

    try:
        header.unpack(stream)
    except (MagicException, ChunkUnpackException) as e:
        raise InputFormatException('This is not a PNG file. I require a PNG file!') from e

    return header


def log_header(chunks):
    try:
        header = get_header(chunks)
    except (ValueError, ChunkUnpackException) as e:
        logger.warning('cannot decode the IHDR chunk: %s', e)
        return

    logger.info('image %s', header)

    if header.interlace.value != PNGInterlaceType.NONE:
        logger.warning('interlaced image, the pixel data is recompressed as it is')


def convert(data: bytes, config: Config = None) -> bytes:
    config = config or Config()

    stream = Stream(bytes(data), max_read=config.bufsize)

    check_png_header(stream)

    chunks = ChunkReader(config).parse(stream)

    if not any(_.is_type(PNGChunkType.CgBI) for _ in chunks):
        logger.info('no CgBI chunk found, this is probably a standard PNG already')

    log_header(chunks)

    ChunkProcessor(config).process(chunks)

    output = ChunkWriter().write(chunks)

    if config.verify:
        verify_png(output)

    logger.info('converted %d chunks, %d bytes in, %d bytes out', len(chunks), len(data), len(output))

    return output


def write_output(path, data: bytes):
    try:
        fd = os.open(path, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, OUTPUT_MODE)
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
    except OSError as e:
        raise OutputException(f'cannot write \'{path}\': {e}') from e


def read_input(path) -> bytes:
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise InputException(f'cannot read \'{path}\': {e}') from e


def convert_file(input_path, output_path, config: Config = None) -> bytes:
    output = convert(read_input(input_path), config=config)

    write_output(output_path, output)

    return output
