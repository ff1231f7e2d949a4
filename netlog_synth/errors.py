"""Exceptions raised while building or checking a devtools log."""


class NetlogSynthError(Exception):
    """Base class for all netlog_synth errors."""


class MalformedFixtureError(NetlogSynthError, ValueError):
    """The input records contradict themselves (broken test fixture)."""


class RoundTripMismatchError(NetlogSynthError, AssertionError):
    """Decoding the synthesized log did not reproduce the input records."""
