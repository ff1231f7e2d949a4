from .extractor import ExtractedTiming, extract_partial_timing, time_defined
from .normalizer import NormalizedTiming, normalize_request_timing


__all__ = [
    "ExtractedTiming",
    "NormalizedTiming",
    "extract_partial_timing",
    "normalize_request_timing",
    "time_defined",
]
