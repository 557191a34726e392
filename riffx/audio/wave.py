'''
# Waveform Audio File Format

The chunks decoded here are the ones carrying the format of the samples and
the cue points with their labels, see
<https://www.mmsp.ece.mcgill.ca/Documents/AudioFormats/WAVE/WAVE.html>.

Any other chunk is opaque and it's rendered as an hexdump.
'''
from enum import Enum

from ..core import Chunk
from .. import fields
from ..properties import Dependency


class FormatCode(Enum):
    '''Compression code of the format chunk'''
    UNKNOWN    = 0x0000
    PCM        = 0x0001
    ADPCM      = 0x0002
    IEEE_FLOAT = 0x0003
    ALAW       = 0x0006
    MULAW      = 0x0007
    IMA_ADPCM  = 0x0011
    MPEGLAYER3 = 0x0055
    XMA2       = 0x0166
    EXTENSIBLE = 0xfffe
    WWISE      = 0xffff  # Audiokinetic Wwise Vorbis


class FmtChunk(Chunk):
    '''
    The first 16 bytes are always present, the count of the extra bytes only
    for the non PCM formats (and it's followed by them).
    '''
    compression     = fields.StructField('H', enum=FormatCode, label='Compression')
    channels        = fields.StructField('H', label='# Channels')
    sample_rate     = fields.StructField('I', label='Sample Rate')
    byte_rate       = fields.StructField('I', label='Avg. Bytes/s')
    block_align     = fields.StructField('H', label='Block align')
    bits_per_sample = fields.StructField('H', label='Signif. bit/s')
    extra_size      = fields.StructField('H', label='Xtra FMT bytes', optional=True)
    extra           = fields.PaddingField()


class CuePoint(Chunk):
    cue_id        = fields.StructField('I', label='Cue ID')
    position      = fields.StructField('I', label='Cue Position')
    data_chunk    = fields.FourCCField(label='Data Chunk ID')
    chunk_start   = fields.StructField('I', label='Chunk Start')
    block_start   = fields.StructField('I', label='Block Start')
    sample_offset = fields.StructField('I', label='Sample Offset')


class CueChunk(Chunk):
    count  = fields.StructField('I', label='# Cue points')
    points = fields.ArrayField(CuePoint, n=Dependency('.count'))


class LabelChunk(Chunk):
    '''Used both for "labl" and "note", they associate a text to a cue point'''
    cue_id = fields.StructField('I', label='Label ID')
    text   = fields.CStringField(label='Label Text')


RENDERERS = {
    b'fmt ': FmtChunk,
    b'cue ': CueChunk,
    b'labl': LabelChunk,
    b'note': LabelChunk,
}
