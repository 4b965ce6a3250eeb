"""
The pngme command line interface. It reads a PNG file, performs one of the following operations
on its chunks and writes the file back when the operation has modified it:

    pngme encode FILE CHUNK MESSAGE
    pngme decode FILE CHUNK
    pngme remove FILE CHUNK
    pngme print  FILE

All of the actual work is done by `pngme.lib.png`; this module only handles arguments, files and
output. Errors are reported through the log and result in a nonzero exit code.
"""
from __future__ import annotations

import argparse
import sys

from typing import Callable, Sequence

import colorama

import pngme

from pngme.lib.argparser import ArgparseError, ArgumentParserWithSubcommands
from pngme.lib.environment import LogLevel, environment, logger, set_log_level
from pngme.lib.png import Chunk, ChunkNotFound, ChunkType, Png, PngError
from pngme.lib.tools import exception_to_string

_logger = logger(__name__)


class ReservedBitSet(PngError):
    def __init__(self, chunk_type: ChunkType):
        self.chunk_type = chunk_type
        super().__init__(
            F'The chunk type {chunk_type} has the reserved bit set; the third letter must be uppercase.')


def encode(png: Png, args: argparse.Namespace) -> bool:
    chunk_type = ChunkType.FromString(args.chunk)
    if not chunk_type.is_reserved_bit_valid():
        if environment.strict.value:
            raise ReservedBitSet(chunk_type)
        _logger.warning(F'the chunk type {chunk_type} has the reserved bit set, it is not a valid PNG chunk type')
    if chunk_type.is_critical():
        _logger.warning(F'the chunk type {chunk_type} is critical; image decoders will refuse the file')
    png.append_chunk(Chunk(chunk_type, args.message.encode('utf8')))
    return True


def decode(png: Png, args: argparse.Namespace) -> bool:
    chunk = png.chunk_by_type(args.chunk)
    if chunk is None:
        raise ChunkNotFound(ChunkType.FromString(args.chunk))
    print(chunk.data_as_string())
    return False


def remove(png: Png, args: argparse.Namespace) -> bool:
    chunk = png.remove_chunk(args.chunk)
    print(F'Removed: {chunk}')
    return True


def colorize(chunk_type: ChunkType) -> str:
    """
    Highlight the type code of critical chunks when the output is a terminal.
    """
    code = str(chunk_type)
    if environment.colorless.value or not sys.stdout.isatty():
        return code
    color = colorama.Fore.LIGHTYELLOW_EX if chunk_type.is_critical() else colorama.Fore.LIGHTCYAN_EX
    return F'{color}{code}{colorama.Style.RESET_ALL}'


def print_chunks(png: Png, args: argparse.Namespace) -> bool:
    for chunk in png:
        print(colorize(chunk.chunk_type), chunk.length)
    return False


def argparser() -> ArgumentParserWithSubcommands:
    argp = ArgumentParserWithSubcommands(
        prog='pngme',
        description='Hide messages in PNG files, recover them, and remove them again.')
    argp.add_argument(
        '-V', '--version',
        action='version',
        version=pngme.__version__,
        help='Show the currently installed version of pngme and exit.'
    )
    argp.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase the log verbosity; can be specified twice.'
    )
    argp.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Do not log anything, not even errors.'
    )

    commands = argp.add_subcommands(dest='command', metavar='command', required=True)

    def command(name: str, handler: Callable[[Png, argparse.Namespace], bool], description: str, writes=False):
        cmd = commands.add_parser(name, help=description, description=description)
        cmd.set_defaults(handler=handler)
        cmd.add_argument('file', metavar='FILE', help='The PNG file to operate on.')
        if writes:
            cmd.add_argument(
                '-o', '--output',
                metavar='PATH',
                default=None,
                help='Write the result to this path instead of overwriting FILE.'
            )
        return cmd

    cmd = command('encode', encode, 'Append a chunk that contains the given message.', writes=True)
    cmd.add_argument('chunk', metavar='CHUNK', help='The 4-letter type code of the new chunk.')
    cmd.add_argument('message', metavar='MESSAGE', help='The message to store, it is encoded as UTF-8.')

    cmd = command('decode', decode, 'Print the message from the first chunk of the given type.')
    cmd.add_argument('chunk', metavar='CHUNK', help='The 4-letter type code of the chunk.')

    cmd = command('remove', remove, 'Remove the first chunk of the given type.', writes=True)
    cmd.add_argument('chunk', metavar='CHUNK', help='The 4-letter type code of the chunk.')

    command('print', print_chunks, 'List the type code and data length of every chunk.')
    return argp


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main routine of the pngme command line interface; returns the exit code.
    """
    colorama.just_fix_windows_console()
    argp = argparser()

    try:
        args = argp.parse_args_or_fail(argv)
    except ArgparseError as error:
        error.parser.print_usage(sys.stderr)
        print(F'{error.parser.prog}: error: {error!s}', file=sys.stderr)
        return 2

    if args.quiet:
        level = LogLevel.NONE
    elif args.verbose:
        level = LogLevel.FromVerbosity(args.verbose)
    else:
        level = environment.verbosity.value or LogLevel.WARNING
    set_log_level(level)

    try:
        with open(args.file, 'rb') as stream:
            data = stream.read()
        png = Png.FromBytes(data)
        _logger.info(F'read {len(png)} chunks from {args.file}')
        modified = args.handler(png, args)
        if modified:
            path = getattr(args, 'output', None) or args.file
            with open(path, 'wb') as stream:
                stream.write(png.as_bytes())
            _logger.info(F'wrote {len(png)} chunks to {path}')
    except (OSError, PngError) as error:
        _logger.error(exception_to_string(error))
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
