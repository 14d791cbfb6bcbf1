import logging
from typing import List

from pngfix.compression import deflate
from pngfix.config import Config, IDATPolicy
from pngfix.exceptions import CompressionException

from . import PNGChunk, PNGChunkType


logger = logging.getLogger(__name__)


class ChunkProcessor(object):
    '''Recompress the image data from raw deflate to a zlib datastream.

    The chunks are modified in place; only IDAT chunks before IEND are touched
    and a payload is replaced only once both inflating and deflating succeeded.'''

    def __init__(self, config=None):
        self.config = config or Config()

    def iter_idat(self, chunks: List[PNGChunk]):
        for index, chunk in enumerate(chunks):
            if chunk.is_type(PNGChunkType.IEND):
                break

            if chunk.is_type(PNGChunkType.IDAT):
                yield index, chunk

    def recompress(self, payload: bytes) -> bytes:
        data = deflate.inflate_raw(payload, self.config.bufsize)

        return deflate.deflate(data, self.config.bufsize)

    def process(self, chunks: List[PNGChunk]) -> List[PNGChunk]:
        idats = list(self.iter_idat(chunks))
        payloads = {}

        if self.config.idat_policy == IDATPolicy.MERGE and len(idats) > 1:
            logger.info('merging %d IDAT chunks', len(idats))
            # the following IDATs are left as they are, the writer drops them
            first_index = idats[0][0]
            payloads[first_index] = b''.join([chunk.data.value for _, chunk in idats])
            idats = idats[:1]

        for index, chunk in idats:
            logger.debug('processing IDAT chunk #%d', index)

            try:
                new_payload = self.recompress(payloads.get(index, chunk.data.value))
            except CompressionException as e:
                raise CompressionException(e.message, index=index, chunk_type=chunk.type.value) from e

            chunk.data.value = new_payload
            chunk.crc.update()

            logger.debug('chunk #%d: %s, new length: %d, new CRC: %08x',
                         index, chunk.tag, chunk.length.value, chunk.crc.value)

        return chunks
