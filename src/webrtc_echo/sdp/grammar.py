"""SDP grammar: ordered field pipelines for session and media levels.

RFC 4566 §9 fixes the order of fields at each level. The parser never
reorders or guesses: a field may only be skipped where the grammar makes
it optional, and the whole input must be consumed.
"""

from __future__ import annotations

import re

from webrtc_echo.sdp.errors import (
    AttributeFormatError,
    GrammarError,
    TrailingInputError,
)
from webrtc_echo.sdp.fields import (
    Failure,
    FieldParser,
    ParseOutcome,
    Partial,
    Success,
    fragment,
    optional_field,
    reduce_parsers,
    repeated,
    repeated_field,
    required_field,
)
from webrtc_echo.sdp.model import (
    Address,
    Bandwidth,
    Connection,
    MediaDescriptor,
    Origin,
    SessionDescription,
)

_VERSION_LINE = "v=0\r\n"
_TOKEN = r"([^ \r\n]+)"

# RFC 4566 §5.2: o=<username> <sess-id> <sess-version> <nettype> <addrtype>
# <unicast-address>
_ORIGIN_RE = re.compile(rf"^o={' '.join([_TOKEN] * 6)}\r\n")
# RFC 4566 §5.7: c=<nettype> <addrtype> <connection-address>
_CONNECTION_RE = re.compile(rf"^c={_TOKEN} {_TOKEN} {_TOKEN}\r\n")
# RFC 4566 §5.14: m=<media> <port>[/<number of ports>] <proto> <fmt> ...
_MEDIA_RE = re.compile(
    r"^m=([^ \r\n]+) ([^ /\r\n]+)(?:/([^ \r\n]*))? ([^ \r\n]+)((?: [^ \r\n]+)+)\r\n"
)
_DIGITS_RE = re.compile(r"[0-9]+")


def _parse_version(text: str) -> Success[Partial] | Failure:
    # RFC 4566 §5.1: there is no minor version number
    if text.startswith(_VERSION_LINE):
        return Success({"version": 0}, text[len(_VERSION_LINE) :])
    return Failure(GrammarError(f"protocol version is expected: {fragment(text)}"))


def _parse_origin(text: str) -> Success[Partial] | Failure:
    match = _ORIGIN_RE.match(text)
    if match is None:
        return Failure(GrammarError(f"cannot parse origin: {fragment(text)}"))
    username, sess_id, sess_version, net_type, addr_type, addr = match.groups()
    origin = Origin(
        username=username,
        session_id=sess_id,
        session_version=sess_version,
        net_type=net_type,
        address=Address(type=addr_type, value=addr),
    )
    return Success({"origin": origin}, text[match.end() :])


def _parse_one_connection(text: str) -> Success[Partial] | Failure:
    """Match one ``c=`` line as ``{"value": Connection}``.

    A line that starts with ``c=`` but does not match is malformed, not
    absent.
    """
    match = _CONNECTION_RE.match(text)
    if match is None:
        if text.startswith("c="):
            return Failure(GrammarError(f"cannot parse connection: {fragment(text)}"))
        return Success({}, text)
    net_type, addr_type, addr = match.groups()
    connection = Connection(net_type=net_type, address=Address(addr_type, addr))
    return Success({"value": connection}, text[match.end() :])


def _parse_session_connection(text: str) -> Success[Partial] | Failure:
    # RFC 4566 §9: at most one connection-field at session level
    outcome = _parse_one_connection(text)
    if isinstance(outcome, Failure) or "value" not in outcome.value:
        return outcome
    return Success({"connection": outcome.value["value"]}, outcome.rest)


# RFC 4566 §9: media-level "*connection-field" permits several c= lines
_parse_media_connections = repeated(
    _parse_one_connection,
    lambda conns: {"connections": tuple(conns)},
    "c=",
)


def _split_bandwidth(value: str) -> Bandwidth:
    bw_type, sep, bw_value = value.partition(":")
    if not sep:
        raise AttributeFormatError(f"failed to parse bandwidth: {value!r}")
    return Bandwidth(type=bw_type, value=bw_value)


_bandwidth_lines = repeated_field("b", lambda values: {"bandwidth": values})


def _parse_bandwidth(text: str) -> Success[Partial] | Failure:
    outcome = _bandwidth_lines(text)
    if isinstance(outcome, Failure):
        return outcome
    try:
        bandwidth = tuple(_split_bandwidth(v) for v in outcome.value["bandwidth"])
    except AttributeFormatError as exc:
        return Failure(exc)
    return Success({"bandwidth": bandwidth}, outcome.rest)


def _parse_number(token: str) -> int | None:
    if _DIGITS_RE.fullmatch(token) is None:
        return None
    return int(token)


def _parse_media_line(text: str) -> Success[Partial] | Failure:
    match = _MEDIA_RE.match(text)
    if match is None:
        return Failure(GrammarError(f"cannot parse media: {fragment(text)}"))
    media, port_token, count_token, proto, fmt_text = match.groups()

    port = _parse_number(port_token)
    if port is None:
        return Failure(GrammarError(f"invalid port in media: {fragment(text)}"))

    partial: Partial = {"media": media, "port": port, "proto": proto}
    if count_token is not None:
        port_count = _parse_number(count_token)
        if port_count is None:
            return Failure(
                GrammarError(f"invalid port count in media: {fragment(text)}")
            )
        partial["port_count"] = port_count

    formats: list[int] = []
    for token in fmt_text.split():
        fmt = _parse_number(token)
        if fmt is None:
            return Failure(GrammarError(f"invalid formats: {fmt_text.strip()!r}"))
        formats.append(fmt)
    partial["formats"] = tuple(formats)
    return Success(partial, text[match.end() :])


def _attributes(values: list[str]) -> Partial:
    return {"attributes": tuple(values)}


MEDIA_PARSERS: tuple[FieldParser, ...] = (
    _parse_media_line,
    optional_field("i", lambda v: {"information": v}),
    _parse_media_connections,
    _parse_bandwidth,
    optional_field("k", lambda v: {"key": v}),
    repeated_field("a", _attributes),
)


def _parse_media_descriptions(text: str) -> Success[Partial] | Failure:
    media: list[MediaDescriptor] = []
    while text.startswith("m="):
        outcome = reduce_parsers(MEDIA_PARSERS, text)
        if isinstance(outcome, Failure):
            return outcome
        media.append(MediaDescriptor(**outcome.value))
        text = outcome.rest
    return Success({"media": tuple(media)}, text)


SESSION_PARSERS: tuple[FieldParser, ...] = (
    _parse_version,
    _parse_origin,
    required_field("s", "session name", lambda v: {"name": v}),
    optional_field("i", lambda v: {"information": v}),
    optional_field("u", lambda v: {"uri": v}),
    repeated_field("e", lambda vs: {"emails": tuple(vs)}),
    repeated_field("p", lambda vs: {"phones": tuple(vs)}),
    _parse_session_connection,
    _parse_bandwidth,
    repeated_field("t", lambda vs: {"timing": tuple(vs)}),
    optional_field("z", lambda v: {"zone": v}),
    optional_field("k", lambda v: {"key": v}),
    repeated_field("a", _attributes),
    _parse_media_descriptions,
)


def parse_sdp(text: str) -> ParseOutcome[SessionDescription]:
    """Parse a CRLF-delimited SDP document.

    Returns ``Success`` with the full ``SessionDescription`` and an empty
    remainder, or ``Failure`` describing the first violation.
    """
    outcome = reduce_parsers(SESSION_PARSERS, text)
    if isinstance(outcome, Failure):
        return outcome
    if outcome.rest:
        return Failure(
            TrailingInputError(f"not fully parsed: rest: {fragment(outcome.rest)}")
        )
    return Success(SessionDescription(**outcome.value), "")


def parse_sdp_or_raise(text: str) -> SessionDescription:
    """Like ``parse_sdp`` but raises the failure's SdpError."""
    outcome = parse_sdp(text)
    if isinstance(outcome, Failure):
        raise outcome.error
    return outcome.value
