import io

import pytest

from cwgen.cli import build_parser, config_from_args, main, run_headless
from cwgen.config import GeneratorConfig
from cwgen.hw import Channel
from cwgen.models import MatchPolicy


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("CWGEN_REFERENCE_HZ", "CWGEN_TOLERANCE", "CWGEN_POLICY", "CWGEN_CHANNEL"):
        monkeypatch.delenv(name, raising=False)


def test_headless_prints_table_and_marks_choice():
    out = io.StringIO()
    code = run_headless(GeneratorConfig(), 1000.0, out=out)

    text = out.getvalue()
    assert code == 0
    assert "*1    15" in text
    assert "f_actual    =    993.75" in text
    assert "cannot be set" not in text


def test_headless_reports_tolerance_miss():
    out = io.StringIO()
    code = run_headless(GeneratorConfig(tolerance=1), 20.0, out=out)

    assert code == 1
    assert "cannot be set" in out.getvalue()
    assert "*6     1" in out.getvalue()


def test_headless_without_frequency_dumps_state():
    out = io.StringIO()
    assert run_headless(GeneratorConfig(), out=out) == 0
    assert "f0          =    132.50" in out.getvalue()


def test_args_override_config(monkeypatch):
    monkeypatch.setenv("CWGEN_TOLERANCE", "50")
    args = build_parser().parse_args(
        ["--reference-frequency", "125", "--policy", "best", "--channel", "1"]
    )
    config = config_from_args(args)

    assert config.reference_frequency == 125.0
    assert config.tolerance == 50
    assert config.policy is MatchPolicy.BEST
    assert config.channel is Channel.CHANNEL_1


def test_main_headless(capsys):
    assert main(["--no-gui", "-f", "1000"]) == 0
    assert "*1    15" in capsys.readouterr().out

    assert main(["--no-gui", "-f", "1000", "--policy", "best"]) == 0
    assert "*6    53" in capsys.readouterr().out


def test_main_rejects_bad_reference():
    assert main(["--no-gui", "--reference-frequency", "-1"]) == 2
