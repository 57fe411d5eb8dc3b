"""SDP answer generation for a remote WebRTC offer."""

from __future__ import annotations

import dataclasses
from enum import StrEnum

from webrtc_echo.sdp.model import (
    Address,
    MediaDescriptor,
    Origin,
    SessionDescription,
)

LOCAL_ORIGIN = Origin(
    username="-",
    session_id="0",
    session_version="0",
    net_type="IN",
    address=Address(type="IP4", value="127.0.0.1"),
)
LOCAL_SESSION_NAME = "-"
# RFC 4566 §5.9: "t=0 0" is an unbounded, permanent session
DEFAULT_TIMING = "0 0"


class SetupRole(StrEnum):
    """RFC 4145 §4 ``a=setup`` roles."""

    ACTPASS = "actpass"
    ACTIVE = "active"
    PASSIVE = "passive"
    HOLDCONN = "holdconn"


# RFC 5763 §5: the answerer MUST NOT answer with "actpass"
_ANSWER_ROLES: dict[str, SetupRole] = {
    SetupRole.ACTPASS: SetupRole.PASSIVE,
    SetupRole.PASSIVE: SetupRole.ACTIVE,
    SetupRole.ACTIVE: SetupRole.PASSIVE,
}


def invert_setup(role: str) -> str:
    """Return the answerer's role for an offered ``role``.

    Unknown roles are returned unchanged.
    """
    answer = _ANSWER_ROLES.get(role)
    return str(answer) if answer is not None else role


def _answer_attribute(attr: str) -> str:
    name, sep, value = attr.partition(":")
    if name != "setup" or not sep:
        return attr
    return f"setup:{invert_setup(value)}"


def _answer_media(media: MediaDescriptor) -> MediaDescriptor:
    return dataclasses.replace(
        media,
        connections=(),
        bandwidth=(),
        attributes=tuple(_answer_attribute(a) for a in media.attributes),
    )


def make_answer(
    offer: SessionDescription,
    *,
    origin: Origin = LOCAL_ORIGIN,
    name: str = LOCAL_SESSION_NAME,
) -> SessionDescription:
    """Derive the local answer for a remote ``offer``.

    Media sections keep their order and count. Per media, connection and
    bandwidth lines are dropped and ``a=setup`` is inverted; all other
    attributes, including session-level ones, are copied verbatim.
    """
    return SessionDescription(
        version=offer.version,
        origin=origin,
        name=name,
        timing=offer.timing or (DEFAULT_TIMING,),
        attributes=offer.attributes,
        media=tuple(_answer_media(m) for m in offer.media),
    )


def host_candidate(address: str, port: int, protocol: str = "UDP") -> str:
    """Build a host ICE candidate line value for ``address:port``.

    RFC 8839 §5.1: foundation, component 1, transport, priority, address,
    port and ``typ host``.
    """
    return f"candidate:1 1 {protocol} 1 {address} {port} typ host"
