'''
Command line tools:

 $ riffx game.pck -o output -l

find anything that looks like a RIFF/RIFX stream and dump it into separate
files; the streams most likely need some post-processing to be useful (e.g.
ww2ogg and revorb for the Wwise sounds).

 $ unriffle sound.wav

show the chunk tree of a single RIFF/RIFX file.
'''
import argparse
import logging
import os
import sys

from .enum import Options
from .exceptions import NotRiffContainerException, OutputWriteException
from .report import info
from .walker import Walker
from .writer import ensure_directory, extract_file


logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_TRUNCATED = 2


def setup_logging(verbose=False):
    logging.basicConfig(level=logging.DEBUG if verbose or 'DEBUG' in os.environ else logging.INFO)


def build_extract_parser():
    parser = argparse.ArgumentParser(
        prog='riffx',
        description='Extract the RIFF/RIFX streams embedded into the given files.')
    parser.add_argument('files', nargs='+', metavar='FILE', help='input files')
    parser.add_argument('-o', '--output', default='output', help='output directory (default: %(default)s)')
    parser.add_argument('-f', '--flat', action='store_true', help='write all the streams in the output directory')
    parser.add_argument('-l', '--label', action='store_true', help='name the streams after their labl chunk')
    parser.add_argument('-g', '--guess-length', action='store_true',
                        help='use the distance from the next marker instead of the declared size')
    parser.add_argument('-v', '--verbose', action='store_true')

    return parser


def options_from_args(args) -> Options:
    options = Options.NONE
    for flag, option in (
        (args.flat, Options.FLAT),
        (args.label, Options.LABEL),
        (args.guess_length, Options.GUESS_LENGTH),
        (args.verbose, Options.VERBOSE),
    ):
        if flag:
            options |= option

    return options


def extract_main(argv=None) -> int:
    args = build_extract_parser().parse_args(argv)
    options = options_from_args(args)

    setup_logging(options & Options.VERBOSE)

    logger.info('Using "%s" as output directory' % args.output)
    try:
        ensure_directory(args.output)
    except OutputWriteException as e:
        logger.error(str(e))
        return EXIT_FAILURE

    for index, path in enumerate(args.files, start=1):
        if not os.path.isfile(path):
            logger.error('Failed to open %s: not a regular file' % path)
            continue

        logger.info('Processing %s' % path)
        try:
            result = extract_file(path, args.output, index=index, options=options)
        except (OSError, OutputWriteException) as e:
            logger.error('Failed to process %s: %s' % (path, e))
            continue

        logger.info('Dumped %d entries' % len(result.written))
        if result.failures:
            logger.warning('%d entries of %s could not be written' % (len(result.failures), path))

    return EXIT_SUCCESS


def build_dump_parser():
    parser = argparse.ArgumentParser(
        prog='unriffle',
        description='Dump the chunk tree of a RIFF/RIFX file.')
    parser.add_argument('file', nargs='?', default='-', metavar='FILE', help='input file, standard input if "-"')
    parser.add_argument('-v', '--verbose', action='store_true')

    return parser


def dump_main(argv=None, out=None) -> int:
    args = build_dump_parser().parse_args(argv)
    out = out or sys.stdout

    setup_logging(args.verbose)

    try:
        if args.file == '-':
            data = sys.stdin.buffer.read()
        else:
            with open(args.file, 'rb') as f:
                data = f.read()
    except OSError as e:
        logger.error('Failed to open %s: %s' % (args.file, e.strerror))
        return EXIT_FAILURE

    try:
        walker = Walker(data)
    except NotRiffContainerException:
        logger.error('%s is not a RIFF file!' % args.file)
        return EXIT_FAILURE

    print(info('File name', args.file), file=out)
    for line in walker.walk():
        print(line, file=out)

    if walker.truncated:
        logger.warning('%s contains truncated chunks' % args.file)
        return EXIT_TRUNCATED

    return EXIT_SUCCESS


def extract_entry():
    sys.exit(extract_main())


def dump_entry():
    sys.exit(dump_main())
