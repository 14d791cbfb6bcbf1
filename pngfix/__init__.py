"""
# pngfix

Convert the PNGs found in iOS application bundles (the "CgBI" variant) into
PNGs any decoder can read.

The file format is described with a small declarative layer: a Chunk is a
class whose attributes are Fields, and two operations are defined for it

 1. unpack(): read the binary data from a stream and build a high-level
    representation of it; each field reads from where the previous one stopped.

 2. pack(): encode the high-level representation back into binary data.

Fields can depend on each other (see properties.Dependency), this is how the
length of a PNG chunk follows its payload when the latter is replaced.

On top of that the conversion is a pipeline of three steps

 1. ChunkReader: parse the chunks up to IEND
 2. ChunkProcessor: recompress the raw deflate IDAT data as a zlib datastream
 3. ChunkWriter: write everything back except the private CgBI chunk

"""
from .config import Config, IDATPolicy
from .convert import convert, convert_file
