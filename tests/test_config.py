import pytest

from cwgen.config import DEFAULT_REFERENCE_HZ, GeneratorConfig
from cwgen.hw import Channel
from cwgen.models import MatchPolicy


def test_config_defaults():
    config = GeneratorConfig()
    assert config.reference_frequency == DEFAULT_REFERENCE_HZ
    assert config.tolerance == 10
    assert config.policy is MatchPolicy.OPTIMAL
    assert config.channel is Channel.CHANNEL_2


def test_config_clamps_tolerance_and_validates_reference():
    assert GeneratorConfig(tolerance=0).tolerance == 1
    assert GeneratorConfig(tolerance=1500).tolerance == 999

    with pytest.raises(ValueError):
        GeneratorConfig(reference_frequency=0)


def test_config_rejects_reference_outside_calibration_range():
    assert GeneratorConfig(reference_frequency=100).reference_frequency == 100.0
    assert GeneratorConfig(reference_frequency=150).reference_frequency == 150.0

    with pytest.raises(ValueError):
        GeneratorConfig(reference_frequency=160)
    with pytest.raises(ValueError):
        GeneratorConfig.from_env({"CWGEN_REFERENCE_HZ": "99.5"})


def test_config_from_env():
    config = GeneratorConfig.from_env(
        {
            "CWGEN_REFERENCE_HZ": "128.25",
            "CWGEN_TOLERANCE": "5000",
            "CWGEN_POLICY": "BEST",
            "CWGEN_CHANNEL": "1",
        }
    )
    assert config.reference_frequency == 128.25
    assert config.tolerance == 999
    assert config.policy is MatchPolicy.BEST
    assert config.channel is Channel.CHANNEL_1


def test_config_from_empty_env_uses_defaults():
    assert GeneratorConfig.from_env({}) == GeneratorConfig()


def test_config_from_env_rejects_bad_channel():
    with pytest.raises(ValueError):
        GeneratorConfig.from_env({"CWGEN_CHANNEL": "3"})
