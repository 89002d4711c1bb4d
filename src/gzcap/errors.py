"""Typed errors for gzcap.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_DESTINATION_EXISTS = 11
EXIT_MISSING_DEPENDENCY = 12
EXIT_SIZE_LIMIT = 14


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage error (invalid args, bad size, wrong extension)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (I/O error, corrupt stream, etc.)"),
    ExitCodeInfo(
        EXIT_DESTINATION_EXISTS, "DESTINATION_EXISTS", "Decompression output already exists"
    ),
    ExitCodeInfo(
        EXIT_MISSING_DEPENDENCY, "MISSING_DEPENDENCY", "Codec library not installed (e.g. zstandard)"
    ),
    ExitCodeInfo(
        EXIT_SIZE_LIMIT, "SIZE_LIMIT", "At least one file hit the -l byte cap (output discarded)"
    ),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE, do not edit manually.\n")
    lines.append("> Source of truth: `src/gzcap/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- All internal errors extend `GzcapError` and carry an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    lines.append(
        "- `SIZE_LIMIT` is reported after the whole queue ran; other errors stop the queue.\n"
    )
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class GzcapError(Exception):
    """Base error for gzcap."""

    exit_code: int = EXIT_GENERIC


class UsageError(GzcapError):
    exit_code = EXIT_USAGE


class SizeSpecError(UsageError, ValueError):
    """A -l size string could not be resolved to a byte count."""


class UnrecognizedUnitSuffix(SizeSpecError):
    def __init__(self, suffix: str) -> None:
        super().__init__(f"unable to use {suffix!r} as modifier for bytes (expected G, M or K)")
        self.suffix = suffix


class InvalidIntegerLiteral(SizeSpecError):
    def __init__(self, literal: str, reason: str = "not a base-10 integer") -> None:
        super().__init__(f"unable to convert {literal!r} to int: {reason}")
        self.literal = literal


class WrongExtension(UsageError):
    def __init__(self, filename: str, expected: str) -> None:
        super().__init__(f"invalid file extension: {filename} (expected {expected})")
        self.filename = filename
        self.expected = expected


class IOFailure(GzcapError):
    exit_code = EXIT_GENERIC


class DestinationExists(IOFailure):
    exit_code = EXIT_DESTINATION_EXISTS

    def __init__(self, path: str) -> None:
        super().__init__(f"output file already exists: {path}")
        self.path = path


class CorruptStream(GzcapError):
    exit_code = EXIT_GENERIC


class MissingDependency(GzcapError):
    exit_code = EXIT_MISSING_DEPENDENCY


class SizeLimitExceeded(GzcapError):
    exit_code = EXIT_SIZE_LIMIT

    def __init__(self, limit: int, written: int) -> None:
        super().__init__(
            f"needed size is larger than the maximum provided size ({limit} bytes)"
        )
        self.limit = limit
        self.written = written
