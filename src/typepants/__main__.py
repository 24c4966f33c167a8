"""Command-line interface: educate the punctuation of HTML files.

Usage:
    python -m typepants page.html > educated.html
    cat page.html | python -m typepants --attr 2 --entities unicode
"""

import argparse
import pathlib
import sys

from .config import Config, ConfigError, DashBehavior, EllipsisBehavior, EntityStyle, QuoteBehavior
from .converter import convert


def build_parser():
    parser = argparse.ArgumentParser(
        prog="typepants",
        description="Convert straight quotes, dashes and ellipses in HTML into typographic punctuation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Preset codes for --attr:\n"
            "  0   do nothing\n"
            "  1   quotes, ``backticks'', -- as em dash, ellipses\n"
            "  2   as 1, with -- as en dash and --- as em dash\n"
            "  3   as 1, with -- as em dash and --- as en dash\n"
            "  -1  turn curly entities back into ASCII\n"
            "or a combination of the flags q b B d D i e w u h s."
        ),
    )
    parser.add_argument("files", nargs="*", type=pathlib.Path, help="Input files (default: standard input)")
    parser.add_argument("-o", "--output", type=pathlib.Path, help="Write the result to this file")
    parser.add_argument("-a", "--attr", help="SmartyPants preset or flag string to start from")
    parser.add_argument(
        "--double-dash", choices=[member.value for member in DashBehavior], help="How to render --",
    )
    parser.add_argument(
        "--triple-dash", choices=[member.value for member in DashBehavior], help="How to render ---",
    )
    parser.add_argument(
        "--entities",
        choices=[member.value for member in EntityStyle],
        help="Output style for the produced punctuation (default: numeric)",
    )
    parser.add_argument("--no-ellipses", action="store_true", help="Leave ... and . . . alone")
    parser.add_argument("--no-backticks", action="store_true", help="Leave ``double backticks'' alone")
    parser.add_argument("--single-backticks", action="store_true", help="Also educate `single backticks'")
    parser.add_argument("--no-quotes", action="store_true", help="Leave straight \" and ' alone")
    parser.add_argument("--convert-quot", action="store_true", help="Educate &quot; like a straight double quote")
    parser.add_argument("--debug", action="store_true", help="Trace every token on standard error")
    return parser


def config_from_args(args):
    config = Config.from_attr(args.attr) if args.attr is not None else Config()
    changes = {}
    if args.double_dash:
        changes["double_dash"] = args.double_dash
    if args.triple_dash:
        changes["triple_dash"] = args.triple_dash
    if args.entities:
        changes["entities"] = args.entities
    if args.no_ellipses:
        changes["ellipses"] = EllipsisBehavior.DO_NOTHING
    if args.no_backticks:
        changes["double_backticks"] = QuoteBehavior.DO_NOTHING
    if args.single_backticks:
        changes["single_backticks"] = QuoteBehavior.CONVERT_TO_CURLY
    if args.no_quotes:
        changes["quote_chars"] = QuoteBehavior.DO_NOTHING
    if args.convert_quot:
        changes["convert_quot"] = True
    return config.replace(**changes)


def _read_source(path):
    # newline="" keeps \r\n intact inside <pre> and friends.
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def _read_stdin():
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        # Already a text stream without a byte layer (e.g. io.StringIO).
        return sys.stdin.read()
    return buffer.read().decode("utf-8")


def _write_stdout(text):
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        sys.stdout.write(text)
        return
    sys.stdout.flush()
    buffer.write(text.encode("utf-8"))
    buffer.flush()


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = config_from_args(args)
    except ConfigError as exc:
        parser.error(str(exc))

    if args.files:
        sources = []
        for path in args.files:
            try:
                sources.append(_read_source(path))
            except OSError as exc:
                parser.exit(1, f"typepants: cannot read {path}: {exc.strerror}\n")
    else:
        sources = [_read_stdin()]

    result = "".join(convert(source, config, debug=args.debug) for source in sources)

    if args.output:
        with open(args.output, "w", encoding="utf-8", newline="") as f:
            f.write(result)
    else:
        _write_stdout(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
