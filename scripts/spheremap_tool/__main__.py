"""CLI entry point for spheremap_tool.

Invoke as:  python scripts/spheremap_tool [opts] [-] input_prefix input_extension
"""

# Bootstrap: when run as `python scripts/spheremap_tool` (directory path),
# re-execute through runpy so the package machinery resolves relative imports
# correctly and without DeprecationWarning.
if __name__ == "__main__" and not __package__:
    import os
    import runpy
    import sys

    _scripts_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    if _scripts_dir not in sys.path:
        sys.path.insert(0, _scripts_dir)
    runpy.run_module("spheremap_tool", run_name="__main__", alter_sys=True)
    raise SystemExit(0)  # unreachable, run_module already calls sys.exit()

import argparse
import sys

try:
    import numpy  # noqa: F401
except ImportError:
    sys.exit("Missing dependency: numpy — install with: pip install numpy")

try:
    import PIL  # noqa: F401
except ImportError:
    sys.exit("Missing dependency: Pillow — install with: pip install Pillow")

from .compositor import OUTPUT_EXTENSION, convert, default_output_path
from .errors import ImageLoadError, UsageError
from .sampling import JITTER_PATTERNS, jitter_pattern

DEFAULT_SIZE = 1024
DEFAULT_SAMPLES = 1

# Options that consume the following argument as their value
VALUE_OPTIONS = ("-aa", "-size", "-o")


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message):
        raise UsageError(message)


def build_parser():
    parser = UsageParser(
        prog="SpheremapTool",
        usage="%(prog)s [opts] [-] input_prefix input_extension",
        description="Convert a six-face cube map into a spheremap image.",
        epilog=(
            "Faces are read from <input_prefix>_{right,left,top,bottom,front,back}"
            ".<input_extension>.  A lone '-' marks every remaining argument as "
            "positional."
        ),
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("input_prefix", help="Path prefix shared by the six face images")
    parser.add_argument("input_extension", help="File extension of the face images")
    parser.add_argument(
        "-aa",
        dest="samples",
        metavar="1|5",
        type=int,
        default=DEFAULT_SAMPLES,
        help=f"Specify number of AA samples. (Default: {DEFAULT_SAMPLES})",
    )
    parser.add_argument(
        "-size",
        metavar="<int>",
        type=int,
        default=DEFAULT_SIZE,
        help=f"Specifies output image size. (Default: {DEFAULT_SIZE})",
    )
    parser.add_argument(
        "-o",
        dest="output",
        metavar="<filename>",
        help=(
            "Manually specifies output file. "
            f'(Default: "<input_prefix>_spheremap.{OUTPUT_EXTENSION}")'
        ),
    )
    parser.add_argument(
        "-h", "-help", action="help", help="Print this help text."
    )
    return parser


def prepare_argv(argv):
    """Rewrite argv into a form argparse parses the same way the tool reads it.

    Each of -aa/-size/-o is joined with the token that follows it, so a value
    starting with '-' (or a bare '-') is still taken as the value.  The first
    free-standing '-' becomes argparse's '--' terminator.  '--' and the
    '-size=7' style are not options this tool knows.
    """
    args = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "-":
            args.append("--")
            args.extend(argv[i + 1:])
            break
        if arg == "--" or ("=" in arg and arg.partition("=")[0] in VALUE_OPTIONS):
            raise UsageError(f"Unknown option {arg}.")
        if arg in VALUE_OPTIONS and i + 1 < len(argv):
            args.append(f"{arg}={argv[i + 1]}")
            i += 2
            continue
        args.append(arg)
        i += 1
    return args


def parse_args(argv=None):
    """Parse the command line, raising UsageError for anything invalid."""
    if argv is None:
        argv = sys.argv[1:]

    args = build_parser().parse_args(prepare_argv(argv))

    if args.samples not in JITTER_PATTERNS:
        raise UsageError("Invalid AA sample pattern.")
    if args.size <= 0:
        raise UsageError(f"Output size must be a positive integer, got: {args.size}")
    if not args.output:
        args.output = default_output_path(args.input_prefix)
    return args


def main(argv=None):
    try:
        args = parse_args(argv)
    except UsageError as exc:
        build_parser().print_usage(sys.stderr)
        print(f"{exc} Try -help.", file=sys.stderr)
        return 1

    try:
        convert(
            args.input_prefix,
            args.input_extension,
            args.output,
            args.size,
            jitter_pattern(args.samples),
        )
    except ImageLoadError as exc:
        print(exc, file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
