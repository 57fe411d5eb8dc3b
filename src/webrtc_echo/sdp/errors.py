"""SDP error hierarchy."""


class SdpError(Exception):
    """Base SDP exception."""


class GrammarError(SdpError):
    """A required field is absent, out of order, or malformed."""


class TrailingInputError(SdpError):
    """The grammar matched but input text remains."""


class LoopInvariantError(SdpError):
    """A repeated-field parser matched without consuming input."""


class AttributeFormatError(SdpError):
    """A bandwidth or transport attribute lacks its separator."""


class BundleError(SdpError):
    """Base for BUNDLE group extraction failures."""


class BundleResolutionError(BundleError):
    """A BUNDLE group is empty or names a MID with no media section."""


class BundleConsistencyError(BundleError):
    """Media sections in one BUNDLE group disagree on ICE/DTLS identity."""
