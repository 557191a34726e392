from enum import Enum, Flag, auto


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()


class Options(Flag):
    '''It indicates how the extraction of the streams must be performed'''
    NONE         = 0
    FLAT         = 1 << 0  # single output directory for all the inputs
    LABEL        = 1 << 1  # name the output file after the labl chunk
    GUESS_LENGTH = 1 << 2  # use the next marker instead of the declared size
    VERBOSE      = 1 << 3
