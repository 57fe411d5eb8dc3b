"""Render a SessionDescription back into SDP text."""

from __future__ import annotations

from webrtc_echo.sdp.model import (
    Bandwidth,
    Connection,
    MediaDescriptor,
    Origin,
    SessionDescription,
)


def _origin_value(origin: Origin) -> str:
    return " ".join(
        [
            origin.username,
            origin.session_id,
            origin.session_version,
            origin.net_type,
            origin.address.type,
            origin.address.value,
        ]
    )


def _connection_value(connection: Connection) -> str:
    return f"{connection.net_type} {connection.address.type} {connection.address.value}"


def _bandwidth_value(bandwidth: Bandwidth) -> str:
    return f"{bandwidth.type}:{bandwidth.value}"


def _media_value(media: MediaDescriptor) -> str:
    port = str(media.port)
    if media.port_count is not None:
        port += f"/{media.port_count}"
    formats = " ".join(str(fmt) for fmt in media.formats)
    return f"{media.media} {port} {media.proto} {formats}"


def _media_lines(media: MediaDescriptor) -> list[tuple[str, str]]:
    lines = [("m", _media_value(media))]
    if media.information is not None:
        lines.append(("i", media.information))
    lines += [("c", _connection_value(c)) for c in media.connections]
    lines += [("b", _bandwidth_value(b)) for b in media.bandwidth]
    if media.key is not None:
        lines.append(("k", media.key))
    lines += [("a", attr) for attr in media.attributes]
    return lines


def serialize_sdp(sdp: SessionDescription) -> str:
    """Serialize ``sdp`` with CRLF line endings in RFC 4566 §9 field order."""
    lines: list[tuple[str, str]] = [
        ("v", str(sdp.version)),
        ("o", _origin_value(sdp.origin)),
        ("s", sdp.name),
    ]
    if sdp.information is not None:
        lines.append(("i", sdp.information))
    if sdp.uri is not None:
        lines.append(("u", sdp.uri))
    lines += [("e", email) for email in sdp.emails]
    lines += [("p", phone) for phone in sdp.phones]
    if sdp.connection is not None:
        lines.append(("c", _connection_value(sdp.connection)))
    lines += [("b", _bandwidth_value(b)) for b in sdp.bandwidth]
    lines += [("t", timing) for timing in sdp.timing]
    if sdp.zone is not None:
        lines.append(("z", sdp.zone))
    if sdp.key is not None:
        lines.append(("k", sdp.key))
    lines += [("a", attr) for attr in sdp.attributes]
    for media in sdp.media:
        lines += _media_lines(media)
    # RFC 4566 §5: every line, including the last, ends with CRLF
    return "".join(f"{tag}={value}\r\n" for tag, value in lines)
