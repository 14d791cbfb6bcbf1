import logging

from pngfix.config import Config
from pngfix.enum import Compliant
from pngfix.exceptions import (
    ChunkUnpackException,
    ChecksumException,
    StructuralException,
)
from pngfix.streams import Stream

from . import PNGChunk, PNGChunkType


logger = logging.getLogger(__name__)


class ChunkReader(object):
    '''Parse the chunks following the signature until IEND is found.

    The stream is trusted to have the right layout: the only checks are on the
    number of chunks and on the declared lengths, so that a corrupted file fails
    instead of making us read garbage forever.'''

    def __init__(self, config=None):
        self.config = config or Config()

    def parse(self, stream):
        if isinstance(stream, (bytes, bytearray)):
            stream = Stream(stream)

        # a declared length is never trusted beyond the configured capacity
        if stream.max_read is None or stream.max_read > self.config.bufsize:
            stream.max_read = self.config.bufsize

        chunks = []

        for index in range(self.config.max_chunks):
            chunk = PNGChunk()

            try:
                chunk.unpack(stream)
            except ChunkUnpackException as e:
                # the type is meaningful only if we failed after reading it
                chunk_type = chunk.type.value if e.chain[:1] in (['data'], ['crc']) else None
                raise StructuralException(e.message, chain=e.chain, index=index, chunk_type=chunk_type) from e

            logger.debug('found chunk %s at offset %d, length %d, CRC32 %08x', chunk.tag, chunk.offset, chunk.length.value, chunk.crc.value)

            self.check_crc(index, chunk)

            chunks.append(chunk)

            if chunk.is_type(PNGChunkType.IEND):
                if not stream.is_exhausted():
                    logger.warning('ignoring data after the IEND chunk')
                return chunks

        raise StructuralException(f'no IEND chunk found in the first {self.config.max_chunks} chunks')

    def check_crc(self, index, chunk):
        if chunk.crc.is_valid():
            return

        msg = 'CRC mismatch: found %08x, expected %08x' % (chunk.crc.value, chunk.crc.calculate())

        if self.config.compliant & Compliant.CRC:
            raise ChecksumException(msg, index=index, chunk_type=chunk.type.value)

        logger.warning('chunk #%d (%s): %s', index, chunk.tag, msg)
