"""gzcap CLI.

This is the stable CLI entrypoint (console-script: ``gzcap``).

    gzcap compress   [-o NAME] [-l SIZE] [-k] FILE [FILE ...]
    gzcap decompress [-o NAME] [-l SIZE] [-k] FILE [FILE ...]

Errors print a one-line ``[gzcap] ...`` diagnostic on stderr and map to the
exit codes in gzcap.errors.
"""

from __future__ import annotations

import argparse
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from gzcap.core.codecs import DEFAULT_CODEC_ID, codec_ids, resolve_codec
from gzcap.core.size_spec import parse_byte_size
from gzcap.errors import EXIT_GENERIC, GzcapError, UsageError
from gzcap.file_ops import COMMANDS, DEFAULT_LIMIT_SPEC, RunOptions, run


def _version() -> str:
    try:
        return version("gzcap")
    except PackageNotFoundError:
        return "0+unknown"


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-o",
        dest="output",
        type=Path,
        default=None,
        help="Name of output file. Defaults to the input filename plus/minus the codec "
        "extension; ignored if multiple files are passed",
    )
    p.add_argument(
        "-l",
        dest="limit",
        default=DEFAULT_LIMIT_SPEC,
        help=(
            "Max number of bytes to copy (default: %(default)s). Accepts a number of bytes "
            "(4096) or a decimal unit suffix (4G, 4M, 4K)."
        ),
    )
    p.add_argument(
        "-k",
        dest="keep",
        action="store_true",
        help="Keep the input file after a successful operation",
    )
    p.add_argument(
        "--codec",
        default=DEFAULT_CODEC_ID,
        choices=codec_ids(),
        help="Stream codec (default: %(default)s)",
    )
    p.add_argument(
        "--level",
        type=int,
        default=None,
        help="Compression level (codec default if omitted)",
    )
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")
    p.add_argument("files", nargs="+", type=Path, metavar="FILE")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gzcap", description="Size-capped single-file gzip compress/decompress"
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_c = sub.add_parser("compress", help="Compress files (FILE -> FILE.gz)")
    _add_common_args(p_c)

    p_d = sub.add_parser("decompress", help="Decompress files (FILE.gz -> FILE)")
    _add_common_args(p_d)

    return p


def _options_from_ns(ns: argparse.Namespace) -> RunOptions:
    limit = parse_byte_size(str(ns.limit))
    if limit < 0:
        raise UsageError(f"size limit must not be negative: {ns.limit}")
    return RunOptions(
        output=ns.output,
        limit=limit,
        keep=bool(ns.keep),
        codec=resolve_codec(ns.codec, ns.level),
    )


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        if ns.cmd not in COMMANDS:
            raise AssertionError("unreachable")
        opts = _options_from_ns(ns)
        report = run(ns.cmd, ns.files, opts)
        return report.exit_code

    except SystemExit:
        raise
    except GzcapError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[gzcap] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[gzcap] error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
