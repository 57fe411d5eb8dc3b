"""Shared SDP fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest

SCENARIO_OFFER = (
    "v=0\r\n"
    "o=- 0 0 IN IP4 127.0.0.1\r\n"
    "s=-\r\n"
    "t=0 0\r\n"
    "m=audio 9 UDP/TLS/RTP/SAVPF 0\r\n"
    "a=mid:0\r\n"
    "a=ice-ufrag:abc\r\n"
    "a=ice-pwd:defdefdefdefdefdefdef\r\n"
    "a=setup:actpass\r\n"
    "a=fingerprint:sha-256 AA:BB\r\n"
    "a=group:BUNDLE 0\r\n"
)

# RFC 4566 §5 example session description
RFC4566_EXAMPLE = (
    "v=0\r\n"
    "o=jdoe 2890844526 2890842807 IN IP4 10.47.16.5\r\n"
    "s=SDP Seminar\r\n"
    "i=A Seminar on the session description protocol\r\n"
    "u=http://www.example.com/seminars/sdp.pdf\r\n"
    "e=j.doe@example.com (Jane Doe)\r\n"
    "c=IN IP4 224.2.17.12/127\r\n"
    "t=2873397496 2873404696\r\n"
    "a=recvonly\r\n"
    "m=audio 49170 RTP/AVP 0\r\n"
    "m=video 51372 RTP/AVP 99\r\n"
    "a=rtpmap:99 h263-1998/90000\r\n"
)

FINGERPRINT = (
    "sha-256 "
    "19:E2:1C:3B:4B:9F:81:E6:B8:5C:F4:A5:A8:D8:73:04:"
    "BB:05:2F:70:9F:04:A9:0E:05:E9:26:33:E8:70:88:A2"
)


def _sdp_lines(lines: list[str]) -> str:
    return "".join(f"{line}\r\n" for line in lines)


@pytest.fixture
def transport_attrs() -> Callable[..., list[str]]:
    """Factory for the ICE/DTLS attributes of one WebRTC media section."""

    def make(
        mid: str,
        *,
        ufrag: str = "EsAw",
        pwd: str = "P2uYro0UCOQ4zxjKXaWCBui1",
        options: str = "trickle",
        setup: str = "actpass",
        fingerprint: str = FINGERPRINT,
        candidates: tuple[str, ...] = (),
    ) -> list[str]:
        attrs = [
            f"mid:{mid}",
            f"ice-ufrag:{ufrag}",
            f"ice-pwd:{pwd}",
            f"ice-options:{options}",
            f"fingerprint:{fingerprint}",
            f"setup:{setup}",
        ]
        attrs += [f"candidate:{c}" for c in candidates]
        attrs.append("rtcp-mux")
        return attrs

    return make


@pytest.fixture
def make_sdp() -> Callable[..., str]:
    """Factory for a browser-style offer with one m= section per attr list."""

    def make(
        media: list[list[str]], session_attrs: list[str] | None = None
    ) -> str:
        lines = [
            "v=0",
            "o=- 4611731400430051336 2 IN IP4 127.0.0.1",
            "s=-",
            "t=0 0",
        ]
        lines += [f"a={attr}" for attr in session_attrs or []]
        for index, attrs in enumerate(media):
            if index == 0:
                lines.append("m=audio 9 UDP/TLS/RTP/SAVPF 111 0 8")
            else:
                lines.append("m=video 9 UDP/TLS/RTP/SAVPF 96 97")
            lines.append("c=IN IP4 0.0.0.0")
            lines.append("b=AS:500")
            lines += [f"a={attr}" for attr in attrs]
        return _sdp_lines(lines)

    return make


@pytest.fixture
def scenario_offer() -> str:
    return SCENARIO_OFFER


@pytest.fixture
def rfc4566_example() -> str:
    return RFC4566_EXAMPLE


@pytest.fixture
def browser_offer(
    make_sdp: Callable[..., str], transport_attrs: Callable[..., list[str]]
) -> str:
    """Two bundled sections with identical ICE/DTLS identity."""
    audio = transport_attrs(
        "0", candidates=("1 1 udp 2122260223 192.168.1.10 54321 typ host",)
    )
    video = transport_attrs(
        "1", candidates=("1 1 udp 2122260223 192.168.1.10 54322 typ host",)
    )
    return make_sdp(
        [audio, video],
        session_attrs=["group:BUNDLE 0 1", "extmap-allow-mixed", "msid-semantic: WMS"],
    )


@pytest.fixture
def fingerprint() -> str:
    return FINGERPRINT
