"""Splice a new definition over a named symbol and verify it re-parses."""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .errors import DkodError, InvalidPartitionError, ReplaceFailedError, SymbolNotFoundError
from .symbols import RawCallEdge, Symbol

Extractor = Callable[[bytes, Path], tuple[Sequence[Symbol], Sequence[RawCallEdge]]]

_IN_MEMORY = Path("<in-memory>")
# Matches Rust's ASCII whitespace set for trimming.
_ASCII_WS = b" \t\n\r\x0c"


@dataclass(frozen=True)
class ReplaceOutcome:
    """Result of `replace_symbol`; always carries the spliced source."""

    new_source: bytes


@dataclass(frozen=True)
class ParsedOk(ReplaceOutcome):
    """The splice re-parsed and the replaced symbol is still present."""


@dataclass(frozen=True)
class Fallback(ReplaceOutcome):
    """The splice was applied but could not be verified by a re-parse."""

    reason: str = ""


def _find_target(symbols: Sequence[Symbol], qualified_name: str) -> Symbol:
    for sym in symbols:
        if sym.qualified_name == qualified_name:
            return sym
    short_matches = [sym for sym in symbols if sym.name == qualified_name]
    if not short_matches:
        raise SymbolNotFoundError(qualified_name, _IN_MEMORY)
    if len(short_matches) > 1:
        candidates = [sym.qualified_name for sym in short_matches]
        raise InvalidPartitionError(
            f"ambiguous short name {json.dumps(qualified_name)}; "
            f"pass one of {json.dumps(candidates)} as qualified_name"
        )
    return short_matches[0]


def replace_symbol(
    current_source: bytes,
    qualified_name: str,
    new_body_source: str,
    extract: Extractor,
) -> ReplaceOutcome:
    """Replace the named symbol's span in `current_source` with `new_body_source`.

    The symbol is found by exact qualified name, else by a unique short name.
    The span is widened backwards over outer doc-comments and single-line
    attributes (see `expand_outer_prefix_span`). `extract` parses a source
    and returns its symbols and call edges.

    Raises `SymbolNotFoundError` when nothing matches, `InvalidPartitionError`
    when a short name is ambiguous, `ReplaceFailedError` for an out-of-range
    span; errors from the initial parse propagate unchanged.
    """
    if isinstance(current_source, str):
        current_source = current_source.encode("utf-8")
    symbols, _calls = extract(current_source, _IN_MEMORY)
    target = _find_target(symbols, qualified_name)

    raw_start = target.span.start_byte
    end = target.span.end_byte
    if raw_start > end or end > len(current_source):
        raise ReplaceFailedError(
            f"span out of bounds for symbol '{qualified_name}': start={raw_start} "
            f"end={end} source_len={len(current_source)}"
        )
    start = expand_outer_prefix_span(current_source, raw_start)
    new_source = current_source[:start] + new_body_source.encode("utf-8") + current_source[end:]

    try:
        reparsed, _ = extract(new_source, _IN_MEMORY)
    except DkodError as exc:
        return Fallback(new_source=new_source, reason=f"re-parse failed: {exc}")
    if not reparsed:
        return Fallback(new_source=new_source, reason="re-parse yielded no symbols")
    if any(s.qualified_name == qualified_name or s.name == qualified_name for s in reparsed):
        return ParsedOk(new_source=new_source)
    return Fallback(
        new_source=new_source,
        reason=f"re-parse succeeded but symbol '{qualified_name}' not found in result",
    )


def expand_outer_prefix_span(source: bytes, symbol_start: int) -> int:
    """Return where a splice should begin so it covers the symbol's outer prefix.

    Walks back from the symbol's line over blank lines, `///` doc-comments
    (not `////`) and single-line `#[...]` attributes, then forward-trims the
    leading blank lines so separator whitespace above the prefix is kept.
    A symbol that does not start its line (after indentation) is left alone.
    """
    if symbol_start > len(source):
        return symbol_start
    line_start = source.rfind(b"\n", 0, symbol_start) + 1
    if source[line_start:symbol_start].strip(b" \t"):
        return symbol_start

    cursor = line_start
    while cursor > 0:
        prev_newline = cursor - 1
        prev_line_start = source.rfind(b"\n", 0, prev_newline) + 1
        line = source[prev_line_start:prev_newline]
        trimmed = line.lstrip(_ASCII_WS)

        is_blank = not trimmed
        is_outer_doc = trimmed.startswith(b"///") and trimmed[3:4] != b"/"
        is_outer_attr = trimmed.startswith(b"#[") and line.rstrip(_ASCII_WS).endswith(b"]")
        if is_blank or is_outer_doc or is_outer_attr:
            cursor = prev_line_start
        else:
            break

    while cursor < line_start:
        newline = source.find(b"\n", cursor, line_start)
        line_end = newline if newline >= 0 else line_start
        if source[cursor:line_end].lstrip(_ASCII_WS):
            break
        cursor = min(line_end + 1, line_start)

    return cursor