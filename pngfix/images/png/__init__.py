'''
# Portable Network Graphics

Format created to replace patent-emcumbered GIF files.

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html>.

# The iOS variant

Xcode "optimizes" the PNGs of an application bundle with `pngcrush -iphone`:
a private chunk named CgBI is added in front of IHDR, the IDAT chunks contain a
raw deflate bitstream (without the zlib header and the adler32 trailer), the
pixels are stored as premultiplied BGRA. Any standard decoder chokes on them.

Here we describe the container; reader, processor and writer turn the variant
into a standard PNG recompressing the image data and removing CgBI. The channel
order and the premultiplication are left as they are.
'''
from enum import Enum

from pngfix.core import Chunk
from pngfix import fields
from pngfix.meta import Endianess
from pngfix.properties import Dependency
from pngfix.common import crc


PNG_MAGIC = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'


class PNGChunkType(Enum):
    IHDR = b'IHDR'
    PLTE = b'PLTE'
    IDAT = b'IDAT'
    IEND = b'IEND'
    CgBI = b'CgBI'  # private chunk of the iOS variant


class PNGColorType(Enum):
    '''The color type definition of the PNG is a little tricky and doesn't seem
    to follow a bit-mask. We are going to list all the valid cases.'''
    GRAYSCALE = 0x00
    RGB       = 0x02
    RGB_PALETTE = 0x03
    GS_ALPHA    = 0x04
    RGBA        = 0x06


class PNGCompressionType(Enum):
    '''There is only one method of compression'''
    DEFLATE = 0x00


class PNGFilterType(Enum):
    '''This indicates the preprocessing method applied to the image data before compression. At present, only filter method 0 is defined'''
    ADAPTIVE = 0x00


class PNGInterlaceType(Enum):
    NONE  = 0x00
    ADAM7 = 0x01


class IHDRData(Chunk):
    '''
    Width and height give the image dimensions in pixels.
    Bit depth is a single-byte integer giving the number of bits per sample or per palette index (not per pixel).
    Color type is a single-byte integer that describes the interpretation of the image data.
    '''
    width       = fields.StructField('I', endianess=Endianess.BIG_ENDIAN)
    height      = fields.StructField('I', endianess=Endianess.BIG_ENDIAN)
    depth       = fields.StructField('B')
    color       = fields.StructField('B', enum=PNGColorType, default=PNGColorType.GRAYSCALE)
    compression = fields.StructField('B', enum=PNGCompressionType, default=PNGCompressionType.DEFLATE)
    filter      = fields.StructField('B', enum=PNGFilterType, default=PNGFilterType.ADAPTIVE)
    interlace   = fields.StructField('B', enum=PNGInterlaceType, default=PNGInterlaceType.NONE)

    def __str__(self):
        return '%dx%dx%d %s' % (
            self.width.value,
            self.height.value,
            self.depth.value,
            self.color.value.name,
        )


class PNGHeader(Chunk):
    magic = fields.StringField(8, default=PNG_MAGIC, is_magic=True)


class PNGChunk(Chunk):
    '''This is the main data structure of the format: the 4 fields represent
    a chunk into the file. Each field is intended big-endian.

    A chunk is defined as critical or ancillary depending on the case of the
    starting letter of the type field.

    The crc field is network-byte-order CRC-32 computed over the chunk type and chunk data, but not the length.

    # Critical chunks

     1. IHDR: contains image's width, height, bit depth, color type, compression method, filter method and interlace method
     2. PLTE: contains the palette data
     3. IDAT: contains the actual image data (compressed)
     4. IEND: is the terminator chunk
    '''
    length = fields.StructField('I', endianess=Endianess.BIG_ENDIAN)
    type   = fields.StringField(4)
    data   = fields.StringField(Dependency('.length'))
    crc    = crc.CRCField(['type', 'data'], endianess=Endianess.BIG_ENDIAN)  # network byte order

    @classmethod
    def build(cls, type_tag: bytes, payload: bytes = b''):
        '''Create a chunk with a consistent length and CRC.'''
        chunk = cls()
        chunk.type.value = type_tag
        chunk.data.value = payload
        chunk.crc.update()

        return chunk

    @property
    def tag(self):
        return self.type.value.decode('latin1')

    def is_type(self, chunk_type: PNGChunkType):
        return self.type.value == chunk_type.value

    def isCritical(self):
        return chr(self.type.value[0]).isupper()
