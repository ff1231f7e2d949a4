from dataclasses import dataclass, fields


@dataclass(frozen=True)
class SynthesisConfig:
    """Fixed defaults used to fill in fields a fixture leaves out."""

    # Identifiers
    id_base: str = "127122"
    example_url: str = "https://testingurl.com/"
    redirect_suffix: str = ":redirect"

    # Timing defaults (ms). Start is non-zero so records that accidentally
    # start at 0 are still caught downstream.
    default_start: float = 1000
    default_timing_offset: float = 1000

    # Response defaults
    default_redirect_status: int = 302
    default_status: int = 200
    default_mime_type: str = "text/html"
    default_protocol: str = "http/1.1"
    default_connection_id: int = 140

    # Request defaults
    default_method: str = "GET"
    default_priority: str = "Low"
    default_resource_type: str = "Document"
    default_fail_description: str = "Request failed"

    @property
    def default_frame_id(self) -> str:
        return f"{self.id_base}.1"

    def request_id_for_index(self, index: int) -> str:
        return f"{self.id_base}.{index}"

    @classmethod
    def from_dict(cls, config_dict: dict) -> "SynthesisConfig":
        """Create config from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config_dict.items() if k in known})

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class SynthesisOptions:
    """Per-call options for building a devtools log."""

    skip_verification: bool = False

    @classmethod
    def from_dict(cls, options_dict: dict | None) -> "SynthesisOptions":
        """Accept both ``skip_verification`` and the fixture-style ``skipVerification``."""
        if not options_dict:
            return cls()
        skip = options_dict.get(
            "skip_verification", options_dict.get("skipVerification", False)
        )
        return cls(skip_verification=bool(skip))
