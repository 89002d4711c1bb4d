"""Per-file compress/decompress and the multi-file run loop.

Queue policy:
  - names and extensions for every input are resolved before any file is touched
  - files run sequentially, in command-line order
  - SizeLimitExceeded is soft: partial output removed, warning, next file
  - any other error stops the queue (partial output of the current file removed)
  - inputs are deleted at the end, only those that completed, unless keep=True
"""

from __future__ import annotations

import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from gzcap.core.bounded_copy import bounded_copy
from gzcap.core.codec_base import StreamCodec
from gzcap.core.codec_gzip import CodecGzip
from gzcap.core.size_spec import parse_byte_size
from gzcap.errors import (
    EXIT_OK,
    EXIT_SIZE_LIMIT,
    CorruptStream,
    DestinationExists,
    IOFailure,
    SizeLimitExceeded,
    UsageError,
    WrongExtension,
)

DEFAULT_LIMIT_SPEC = "4G"
DEFAULT_LIMIT = parse_byte_size(DEFAULT_LIMIT_SPEC)

COMMANDS = ("compress", "decompress")


def warn(msg: str) -> None:
    print(f"[gzcap] warning: {msg}", file=sys.stderr)


@dataclass(frozen=True)
class RunOptions:
    """Invocation-wide settings, resolved once from argv."""

    output: Path | None = None
    limit: int = DEFAULT_LIMIT
    keep: bool = False
    codec: StreamCodec = field(default_factory=CodecGzip)


@dataclass
class RunReport:
    completed: list[Path] = field(default_factory=list)
    overflowed: list[Path] = field(default_factory=list)
    outputs: list[Path] = field(default_factory=list)
    not_removed: list[Path] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return EXIT_SIZE_LIMIT if self.overflowed else EXIT_OK


# -------------
# Name handling
# -------------


def _ext(name: str) -> str:
    # last dot of the basename: "x.tar.gz" -> ".gz", ".gz" -> ".gz", "x" -> ""
    base = Path(name).name
    i = base.rfind(".")
    return base[i:] if i >= 0 else ""


def compress_output_path(src: Path, output: Path | None, codec: StreamCodec) -> Path:
    dst = output if output is not None else Path(f"{src}{codec.extension}")
    if _ext(str(dst)) != codec.extension:
        raise WrongExtension(dst.name, codec.extension)
    return dst


def decompress_output_path(src: Path, output: Path | None, codec: StreamCodec) -> Path:
    s = str(src)
    if _ext(s) != codec.extension:
        raise WrongExtension(src.name, codec.extension)
    if output is not None:
        return output
    if not src.name[: -len(codec.extension)]:
        raise UsageError(f"cannot derive an output name from {s!r}; use -o")
    return Path(s[: -len(codec.extension)])


def plan_outputs(
    command: str, inputs: Sequence[Path], output: Path | None, codec: StreamCodec
) -> list[tuple[Path, Path]]:
    if command == "compress":
        resolve = compress_output_path
    elif command == "decompress":
        resolve = decompress_output_path
    else:
        raise UsageError(f"unknown subcommand: {command}")

    plan: list[tuple[Path, Path]] = []
    for src in inputs:
        dst = resolve(src, output, codec)
        if dst.resolve() == src.resolve():
            raise UsageError(f"output would overwrite input: {src}")
        plan.append((src, dst))
    return plan


# ---------
# File I/O
# ---------


def _open_input(src: Path) -> BinaryIO:
    try:
        return src.open("rb")
    except OSError as e:
        raise IOFailure(f"read infile: {src}: {e.strerror or e}") from e


def _create_output(dst: Path, *, exclusive: bool) -> BinaryIO:
    try:
        return dst.open("xb" if exclusive else "wb")
    except FileExistsError as e:
        raise DestinationExists(str(dst)) from e
    except OSError as e:
        raise IOFailure(f"create outfile: {dst}: {e.strerror or e}") from e


@contextmanager
def _discard_on_error(dst: Path) -> Iterator[None]:
    try:
        yield
    except BaseException:
        try:
            dst.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            warn(f"unable to remove partial output {dst}: {e}")
        raise


def compress_file(src: Path, dst: Path, *, limit: int, codec: StreamCodec) -> int:
    """Compress ``src`` into ``dst`` (created or truncated). Returns input bytes read."""
    with _open_input(src) as fin:
        fout = _create_output(dst, exclusive=False)
        with _discard_on_error(dst):
            try:
                with fout, codec.open_writer(fout) as w:
                    return bounded_copy(w, fin, limit)
            except OSError as e:
                raise IOFailure(f"compress {src} -> {dst}: {e}") from e


def decompress_file(src: Path, dst: Path, *, limit: int, codec: StreamCodec) -> int:
    """Decompress ``src`` into a new ``dst``. Returns output bytes written.

    The stream header is validated before ``dst`` is created; ``dst`` must not
    exist yet.
    """
    with _open_input(src) as fin:
        with codec.open_reader(fin) as r:
            fout = _create_output(dst, exclusive=True)
            with _discard_on_error(dst):
                try:
                    with fout:
                        return bounded_copy(fout, r, limit)
                except codec.corrupt_errors as e:
                    raise CorruptStream(f"{src}: {e}") from e
                except OSError as e:
                    raise IOFailure(f"decompress {src} -> {dst}: {e}") from e


def remove_inputs(paths: Sequence[Path]) -> list[Path]:
    """Delete every path; failures are warned about, never raised. Returns the failures."""
    failed: list[Path] = []
    for p in paths:
        try:
            p.unlink()
        except OSError as e:
            warn(f"unable to remove: {p}: {e.strerror or e}")
            failed.append(p)
    return failed


# --------
# Run loop
# --------


def run(command: str, inputs: Sequence[Path], opts: RunOptions) -> RunReport:
    if not inputs:
        raise UsageError("expected a filename in addition to subcommand and flags")

    output = opts.output
    if output is not None and len(inputs) > 1:
        warn("output filename will be ignored for multiple input files")
        output = None

    op = compress_file if command == "compress" else decompress_file
    plan = plan_outputs(command, inputs, output, opts.codec)

    report = RunReport()
    for src, dst in plan:
        try:
            op(src, dst, limit=opts.limit, codec=opts.codec)
        except SizeLimitExceeded as e:
            warn(f"{src}: {e}; partial output {dst} removed")
            report.overflowed.append(src)
            continue
        report.completed.append(src)
        report.outputs.append(dst)

    if not opts.keep:
        report.not_removed = remove_inputs(report.completed)

    return report
