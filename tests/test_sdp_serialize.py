"""Tests for SDP serialization."""

from __future__ import annotations

from webrtc_echo.sdp.fields import Success
from webrtc_echo.sdp.grammar import parse_sdp, parse_sdp_or_raise
from webrtc_echo.sdp.model import (
    Address,
    Bandwidth,
    Connection,
    MediaDescriptor,
    Origin,
    SessionDescription,
)
from webrtc_echo.sdp.serialize import serialize_sdp


def _round_trip(text: str) -> None:
    sdp = parse_sdp_or_raise(text)
    again = parse_sdp(serialize_sdp(sdp))
    assert isinstance(again, Success)
    assert again.value == sdp


def test_scenario_serializes_to_same_text(scenario_offer: str):
    sdp = parse_sdp_or_raise(scenario_offer)
    assert serialize_sdp(sdp) == scenario_offer


def test_rfc4566_example_serializes_to_same_text(rfc4566_example: str):
    sdp = parse_sdp_or_raise(rfc4566_example)
    assert serialize_sdp(sdp) == rfc4566_example


def test_browser_offer_round_trip(browser_offer: str):
    _round_trip(browser_offer)
    assert serialize_sdp(parse_sdp_or_raise(browser_offer)) == browser_offer


def test_round_trip_all_fields():
    _round_trip(
        "v=0\r\n"
        "o=alice 1 2 IN IP6 ::1\r\n"
        "s=Call\r\n"
        "i=info\r\n"
        "u=http://example.com\r\n"
        "e=a@example.com\r\n"
        "p=+1 555 0100\r\n"
        "c=IN IP6 ::1\r\n"
        "b=CT:1000\r\n"
        "t=0 0\r\n"
        "z=2882844526 -1h 2898848070 0\r\n"
        "k=prompt\r\n"
        "a=ice-lite\r\n"
        "m=video 49170/2 RTP/AVP 31 32\r\n"
        "i=camera\r\n"
        "c=IN IP4 224.2.1.1/127\r\n"
        "c=IN IP4 224.2.1.2/127\r\n"
        "b=AS:128\r\n"
        "k=clear:secret\r\n"
        "a=sendonly\r\n"
        "m=application 9 DTLS/SCTP 5000\r\n"
    )


def test_numeric_formats_are_normalized():
    """Leading zeros do not survive, but the parsed document does."""
    text = "v=0\r\no=- 0 0 IN IP4 127.0.0.1\r\ns=-\r\nm=audio 09 RTP/AVP 000 8\r\n"
    sdp = parse_sdp_or_raise(text)
    assert "m=audio 9 RTP/AVP 0 8\r\n" in serialize_sdp(sdp)
    _round_trip(text)


def test_serialize_constructed_document():
    sdp = SessionDescription(
        origin=Origin("-", "42", "1", "IN", Address("IP4", "10.0.0.2")),
        name="echo",
        connection=Connection("IN", Address("IP4", "10.0.0.2")),
        bandwidth=(Bandwidth("AS", "64"),),
        timing=("0 0",),
        attributes=("group:BUNDLE 0",),
        media=(
            MediaDescriptor(
                media="audio",
                port=5000,
                proto="UDP/TLS/RTP/SAVPF",
                formats=(111, 0),
                attributes=("mid:0", "setup:passive"),
            ),
        ),
    )
    assert serialize_sdp(sdp) == (
        "v=0\r\n"
        "o=- 42 1 IN IP4 10.0.0.2\r\n"
        "s=echo\r\n"
        "c=IN IP4 10.0.0.2\r\n"
        "b=AS:64\r\n"
        "t=0 0\r\n"
        "a=group:BUNDLE 0\r\n"
        "m=audio 5000 UDP/TLS/RTP/SAVPF 111 0\r\n"
        "a=mid:0\r\n"
        "a=setup:passive\r\n"
    )
