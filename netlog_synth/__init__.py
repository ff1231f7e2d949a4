from .config import SynthesisConfig, SynthesisOptions
from .errors import MalformedFixtureError, NetlogSynthError, RoundTripMismatchError
from .network_request import NetworkRequest
from .recorder import NetworkRecorder
from .synthesizer import DevtoolsLogSynthesizer, records_to_devtools_log


__all__ = [
    "DevtoolsLogSynthesizer",
    "MalformedFixtureError",
    "NetlogSynthError",
    "NetworkRecorder",
    "NetworkRequest",
    "RoundTripMismatchError",
    "SynthesisConfig",
    "SynthesisOptions",
    "records_to_devtools_log",
]
