from netlog_synth.config import SynthesisConfig, SynthesisOptions


def test_config_round_trips_through_dict():
    config = SynthesisConfig(id_base="42", default_start=2000)

    restored = SynthesisConfig.from_dict({**config.to_dict(), "unknown": True})

    assert restored == config
    assert restored.default_frame_id == "42.1"
    assert restored.request_id_for_index(7) == "42.7"


def test_options_from_dict():
    assert SynthesisOptions.from_dict(None) == SynthesisOptions()
    assert SynthesisOptions.from_dict({"skipVerification": True}).skip_verification
    assert SynthesisOptions.from_dict({"skip_verification": True}).skip_verification
    assert not SynthesisOptions.from_dict({}).skip_verification
