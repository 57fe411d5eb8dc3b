"""WebRTC BUNDLE transport extraction.

RFC 8843 lets several media sections share one transport. Each
``a=group:BUNDLE <mid> ...`` session attribute names the sections of one
group; their ICE credentials (RFC 8839) and DTLS identity (RFC 5763) must
agree because a single ICE/DTLS association carries all of them.
"""

from __future__ import annotations

import dataclasses
import itertools
import logging
from collections.abc import Iterable

from webrtc_echo.sdp.errors import (
    AttributeFormatError,
    BundleConsistencyError,
    BundleResolutionError,
)
from webrtc_echo.sdp.model import MediaDescriptor, SessionDescription

logger = logging.getLogger(__name__)

_TRANSPORT_PREFIXES = ("ice-", "candidate", "setup", "fingerprint")


@dataclasses.dataclass(frozen=True)
class IceParameters:
    ufrag: str | None = None
    pwd: str | None = None
    options: frozenset[str] = frozenset()
    candidates: tuple[str, ...] = ()


@dataclasses.dataclass(frozen=True)
class DtlsParameters:
    fingerprint: str | None = None
    setup: str | None = None


@dataclasses.dataclass(frozen=True)
class Bundle:
    """Transport parameters shared by one BUNDLE group."""

    ice: IceParameters
    dtls: DtlsParameters
    mids: tuple[str, ...] = ()

    def identity(self) -> tuple[object, ...]:
        """Fields every media section of the group must agree on."""
        return (
            self.ice.ufrag,
            self.ice.pwd,
            self.ice.options,
            self.dtls.setup,
            self.dtls.fingerprint,
        )


def _bundle_mid_lists(sdp: SessionDescription) -> list[list[str]]:
    # RFC 5888 §5 places a=group at session level; a group line found in a
    # media section is accepted too, after the session-level ones
    attributes = itertools.chain(sdp.attributes, *(m.attributes for m in sdp.media))
    groups: list[list[str]] = []
    for attr in attributes:
        name, _, value = attr.partition(":")
        tokens = value.split(" ")
        if name == "group" and tokens[0] == "BUNDLE":
            groups.append([mid for mid in tokens[1:] if mid])
    return groups


def _find_media(sdp: SessionDescription, mid: str) -> MediaDescriptor:
    wanted = f"mid:{mid}"
    for media in sdp.media:
        if wanted in media.attributes:
            return media
    raise BundleResolutionError(f"MID is not found: {mid}")


def bundle_groups(
    sdp: SessionDescription,
) -> list[tuple[list[str], list[MediaDescriptor]]]:
    """Resolve every BUNDLE group to its media sections, in attribute order.

    Each group is returned as its MID list paired with the matching sections.
    """
    return [
        (mids, [_find_media(sdp, mid) for mid in mids])
        for mids in _bundle_mid_lists(sdp)
    ]


def transport_parameters(attributes: Iterable[str]) -> Bundle:
    """Collect ICE and DTLS attributes of a single media section."""
    ufrag: str | None = None
    pwd: str | None = None
    options: frozenset[str] = frozenset()
    candidates: list[str] = []
    fingerprint: str | None = None
    setup: str | None = None

    for attr in attributes:
        if not attr.startswith(_TRANSPORT_PREFIXES):
            continue
        name, sep, value = attr.partition(":")
        if not sep:
            raise AttributeFormatError(f"invalid transport attribute: {attr!r}")
        if name == "ice-ufrag":
            ufrag = value
        elif name == "ice-pwd":
            pwd = value
        elif name == "ice-options":
            options = frozenset(value.split(" "))
        elif name in ("candidate", "ice-candidate"):
            candidates.append(value)
        elif name == "setup":
            setup = value
        elif name == "fingerprint":
            fingerprint = value

    return Bundle(
        ice=IceParameters(
            ufrag=ufrag, pwd=pwd, options=options, candidates=tuple(candidates)
        ),
        dtls=DtlsParameters(fingerprint=fingerprint, setup=setup),
    )


def _merge_group(mids: list[str], medias: list[MediaDescriptor]) -> Bundle:
    if not medias:
        raise BundleResolutionError("empty bundle")
    bundles = [transport_parameters(media.attributes) for media in medias]
    first = bundles[0]
    for mid, bundle in zip(mids[1:], bundles[1:]):
        if bundle.identity() != first.identity():
            raise BundleConsistencyError(
                f"ICE attributes of medias are not equal in BUNDLE group "
                f"{' '.join(mids)}: mid {mid}"
            )
    return dataclasses.replace(first, mids=tuple(mids))


def extract_bundles(sdp: SessionDescription) -> list[Bundle]:
    """Return one Bundle per BUNDLE group of ``sdp``.

    Raises BundleResolutionError for dangling MIDs or empty groups and
    BundleConsistencyError when sections of a group disagree on ufrag, pwd,
    ICE options, DTLS setup or fingerprint. Candidates may differ.
    """
    bundles = [_merge_group(mids, medias) for mids, medias in bundle_groups(sdp)]
    logger.debug("Extracted %d bundle(s) from %d media", len(bundles), len(sdp.media))
    return bundles
