"""Parse outcomes and line-field parser combinators.

Every parser takes the unconsumed SDP text and returns a ``ParseOutcome``:
either ``Success`` with a partial record (a dict of constructor keywords)
plus the remaining text, or ``Failure`` carrying an ``SdpError``.
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Callable, Sequence
from typing import Any, Generic, TypeVar

from webrtc_echo.sdp.errors import GrammarError, LoopInvariantError, SdpError

T = TypeVar("T")

Partial = dict[str, Any]

# Longest text fragment quoted back in error descriptions
_FRAGMENT_LIMIT = 60


@dataclasses.dataclass(frozen=True)
class Success(Generic[T]):
    value: T
    rest: str


@dataclasses.dataclass(frozen=True)
class Failure:
    error: SdpError

    @property
    def description(self) -> str:
        return str(self.error)


ParseOutcome = Success[T] | Failure
FieldParser = Callable[[str], "Success[Partial] | Failure"]


def fragment(text: str) -> str:
    """Return the leading line of ``text`` for use in error messages."""
    line = text.split("\r\n", 1)[0]
    if len(line) > _FRAGMENT_LIMIT:
        line = line[:_FRAGMENT_LIMIT] + "..."
    return repr(line)


def _field_regex(tag: str) -> re.Pattern[str]:
    # RFC 4566 §5: <type>=<value> where <type> is exactly one character
    return re.compile(rf"^{re.escape(tag)}=(.*)\r\n")


def required_field(
    tag: str, name: str, build: Callable[[str], Partial]
) -> FieldParser:
    """Parser for a mandatory ``<tag>=value`` line."""
    regex = _field_regex(tag)

    def parse(text: str) -> Success[Partial] | Failure:
        match = regex.match(text)
        if match is None:
            return Failure(GrammarError(f"cannot parse {name}: {fragment(text)}"))
        return Success(build(match.group(1)), text[match.end() :])

    return parse


def optional_field(tag: str, build: Callable[[str], Partial]) -> FieldParser:
    """Parser for an optional ``<tag>=value`` line.

    A missing line is a zero-length match: the partial is empty and the
    text is returned unchanged.
    """
    regex = _field_regex(tag)

    def parse(text: str) -> Success[Partial] | Failure:
        match = regex.match(text)
        if match is None:
            return Success({}, text)
        return Success(build(match.group(1)), text[match.end() :])

    return parse


def repeated(
    single: FieldParser, build: Callable[[list[Any]], Partial], name: str
) -> FieldParser:
    """Apply ``single`` until it stops matching, collecting its values.

    ``single`` reports a match as ``{"value": ...}`` and a non-match as an
    empty partial. A match that leaves the text length unchanged would loop
    forever and is reported as a LoopInvariantError.
    """

    def parse(text: str) -> Success[Partial] | Failure:
        values: list[Any] = []
        while True:
            outcome = single(text)
            if isinstance(outcome, Failure):
                return outcome
            if "value" not in outcome.value:
                return Success(build(values), outcome.rest)
            if len(outcome.rest) == len(text):
                return Failure(
                    LoopInvariantError(
                        f"{name} parser did not consume input: {fragment(text)}"
                    )
                )
            values.append(outcome.value["value"])
            text = outcome.rest

    return parse


def repeated_field(
    tag: str, build: Callable[[list[str]], Partial]
) -> FieldParser:
    """Parser for zero or more consecutive ``<tag>=value`` lines."""
    single = optional_field(tag, lambda value: {"value": value})
    return repeated(single, build, f"{tag}=")


def reduce_parsers(
    parsers: Sequence[FieldParser], text: str
) -> Success[Partial] | Failure:
    """Thread ``text`` through ``parsers`` in order, merging their partials.

    The first failure aborts the reduction. Parsers must contribute disjoint
    keys; a repeated key is a grammar definition bug and raises ValueError.
    """
    merged: Partial = {}
    for parser in parsers:
        outcome = parser(text)
        if isinstance(outcome, Failure):
            return outcome
        overlap = merged.keys() & outcome.value.keys()
        if overlap:
            raise ValueError(f"fields produced twice: {sorted(overlap)}")
        merged.update(outcome.value)
        text = outcome.rest
    return Success(merged, text)
