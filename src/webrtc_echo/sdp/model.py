"""Structured SDP session description (RFC 4566)."""

from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True)
class Address:
    """Address type (``IP4``/``IP6``) and address value."""

    type: str
    value: str


@dataclasses.dataclass(frozen=True)
class Origin:
    """RFC 4566 §5.2 ``o=`` line."""

    username: str
    session_id: str
    session_version: str
    net_type: str
    address: Address


@dataclasses.dataclass(frozen=True)
class Connection:
    """RFC 4566 §5.7 ``c=`` line."""

    net_type: str
    address: Address


@dataclasses.dataclass(frozen=True)
class Bandwidth:
    """RFC 4566 §5.8 ``b=<bwtype>:<bandwidth>``."""

    type: str
    value: str


def _find_attribute(attributes: tuple[str, ...], name: str) -> str | None:
    # RFC 4566 §5.13: a=<attribute> (flag) or a=<attribute>:<value>
    for attr in attributes:
        key, sep, value = attr.partition(":")
        if key == name:
            return value if sep else ""
    return None


@dataclasses.dataclass(frozen=True)
class MediaDescriptor:
    """One media description: the ``m=`` line and the fields that follow it.

    Attributes are kept as raw ``name`` or ``name:value`` text; their
    meaning is resolved by consumers such as the WebRTC bundle extractor.
    """

    media: str
    port: int
    proto: str
    formats: tuple[int, ...]
    port_count: int | None = None
    information: str | None = None
    connections: tuple[Connection, ...] = ()
    bandwidth: tuple[Bandwidth, ...] = ()
    key: str | None = None
    attributes: tuple[str, ...] = ()

    def attribute(self, name: str) -> str | None:
        """Value of the first ``name`` attribute, ``""`` for a flag."""
        return _find_attribute(self.attributes, name)

    @property
    def mid(self) -> str | None:
        return self.attribute("mid")


@dataclasses.dataclass(frozen=True)
class SessionDescription:
    """A parsed SDP document. Immutable; transformations build new ones."""

    origin: Origin
    name: str
    version: int = 0
    information: str | None = None
    uri: str | None = None
    emails: tuple[str, ...] = ()
    phones: tuple[str, ...] = ()
    connection: Connection | None = None
    bandwidth: tuple[Bandwidth, ...] = ()
    timing: tuple[str, ...] = ()
    zone: str | None = None
    key: str | None = None
    attributes: tuple[str, ...] = ()
    media: tuple[MediaDescriptor, ...] = ()

    def attribute(self, name: str) -> str | None:
        """Value of the first session-level ``name`` attribute."""
        return _find_attribute(self.attributes, name)
