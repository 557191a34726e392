"""
# riffx: find, split and dump RIFF/RIFX streams.

A RIFF file is a tree of chunks: each chunk starts with an 8 bytes header
made of a four character code (FourCC) identifying its type and the size
of the payload that follows, padded to an even length.

    .---------------------------.
    | "RIFF" | size | form type |
    |   .--------------------.  |
    |   | "fmt " | size | .. |  |
    |   | "LIST" | size | .. |  |
    |   |    .------------.  |  |
    |   |    | "labl" ... |  |  |
    |   |    '------------'  |  |
    |   '--------------------'  |
    '---------------------------'

RIFF uses little-endian sizes, RIFX the very same layout in big-endian.

Two operations are defined over a byte buffer:

 1. extraction: locate every container embedded into arbitrary data
    (game archives and the like) and split them into separate streams,
    see riffx.locator, riffx.label and riffx.writer.

 2. introspection: walk the chunk tree of a single container and produce
    a line oriented, offset annotated report, see riffx.walker.
"""
