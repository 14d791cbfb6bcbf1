import logging
from enum import Enum, auto
from typing import List

from . import PNGChunk, PNGChunkType, PNGHeader


logger = logging.getLogger(__name__)


class WriterAction(Enum):
    EMIT               = auto()
    SUPPRESS_PRIVATE   = auto()
    SUPPRESS_DUPLICATE = auto()


class ChunkWriter(object):
    '''Serialize the chunks back, signature included.

    CgBI is never written and only the first IDAT survives; nothing is
    written after IEND.'''

    def classify(self, chunks: List[PNGChunk]):
        did_idat = False

        for chunk in chunks:
            if chunk.is_type(PNGChunkType.CgBI):
                action = WriterAction.SUPPRESS_PRIVATE
            elif chunk.is_type(PNGChunkType.IDAT) and did_idat:
                action = WriterAction.SUPPRESS_DUPLICATE
            else:
                did_idat = did_idat or chunk.is_type(PNGChunkType.IDAT)
                action = WriterAction.EMIT

            yield chunk, action

            if chunk.is_type(PNGChunkType.IEND):
                break

    def write(self, chunks: List[PNGChunk]) -> bytes:
        output = [PNGHeader().pack()]

        for chunk, action in self.classify(chunks):
            logger.debug('%s %s (%d bytes)', action.name, chunk.tag, chunk.length.value)

            if action == WriterAction.EMIT:
                output.append(chunk.pack())

        return b''.join(output)
