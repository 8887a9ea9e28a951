class RailFeedError(Exception):
    """Base class for failures local to a single feed message."""


class MalformedPayloadError(RailFeedError):
    """Payload bytes are not well-formed XML."""


class TimeFormatError(RailFeedError, ValueError):
    """A non-empty time-of-day string matches neither HH:MM nor HH:MM:SS."""


class PayloadDecompressionError(RailFeedError):
    """Message body claimed to be gzip but could not be decompressed."""
