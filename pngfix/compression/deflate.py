'''
# DEFLATE streams

PNG image data is a zlib datastream (RFC 1950): a two bytes header, the
deflate bitstream (RFC 1951) and an adler32 trailer. The iOS "CgBI" variant
stores the bare deflate bitstream without header and trailer.

Both directions are bounded by a capacity: exceeding it is an error, never a
silent truncation.
'''
import logging
import zlib

from ..exceptions import CompressionException


logger = logging.getLogger(__name__)

# a negative window size tells zlib there is no header nor trailer
RAW_WBITS = -zlib.MAX_WBITS
WRAPPED_WBITS = zlib.MAX_WBITS


def inflate_raw(payload: bytes, capacity: int) -> bytes:
    '''Decompress a headerless deflate bitstream into at most capacity bytes.'''
    decompressor = zlib.decompressobj(RAW_WBITS)

    try:
        # one byte more than allowed so that we can tell an overflow from an exact fit
        data = decompressor.decompress(payload, capacity + 1)
    except (zlib.error, MemoryError) as e:
        raise CompressionException(f'raw inflate failed: {e}') from e

    if len(data) > capacity:
        raise CompressionException(f'inflated data exceeds the capacity of {capacity} bytes')

    if not decompressor.eof:
        raise CompressionException('raw deflate stream is incomplete')

    if decompressor.unused_data:
        logger.warning('ignoring %d bytes after the end of the deflate stream', len(decompressor.unused_data))

    logger.debug('inflated %d bytes into %d', len(payload), len(data))

    return data


def deflate(data: bytes, capacity: int, level: int = zlib.Z_DEFAULT_COMPRESSION) -> bytes:
    '''Compress into a zlib (wrapped) datastream of at most capacity bytes.'''
    compressor = zlib.compressobj(level, zlib.DEFLATED, WRAPPED_WBITS)

    try:
        payload = compressor.compress(data) + compressor.flush(zlib.Z_FINISH)
    except (zlib.error, MemoryError) as e:
        raise CompressionException(f'deflate failed: {e}') from e

    if len(payload) > capacity:
        raise CompressionException(f'deflated data ({len(payload)} bytes) exceeds the capacity of {capacity} bytes')

    logger.debug('deflated %d bytes into %d', len(data), len(payload))

    return payload


def inflate(payload: bytes, capacity: int) -> bytes:
    '''Decompress a zlib (wrapped) datastream into at most capacity bytes.'''
    decompressor = zlib.decompressobj(WRAPPED_WBITS)

    try:
        data = decompressor.decompress(payload, capacity + 1)
    except (zlib.error, MemoryError) as e:
        raise CompressionException(f'inflate failed: {e}') from e

    if len(data) > capacity:
        raise CompressionException(f'inflated data exceeds the capacity of {capacity} bytes')

    if not decompressor.eof:
        raise CompressionException('zlib stream is incomplete')

    return data
