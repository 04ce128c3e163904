from cwgen.hw import Channel, ShadowTonePort, WaveformMode
from cwgen.models import FrequencySynthesisModel


def test_shadow_port_updates_and_masks():
    port = ShadowTonePort()
    port.update(SCALE1=5, DC2=0x1FF, DIV_SEL=3)

    snapshot = port.snapshot()
    assert snapshot["SCALE1"] == 1
    assert snapshot["DC2"] == 0xFF
    assert snapshot["DIV_SEL"] == 3


def test_shadow_port_rejects_unknown_field():
    port = ShadowTonePort()
    try:
        port.update(R99=1)
    except KeyError as exc:
        assert "Unknown field" in str(exc)
    else:  # pragma: no cover
        raise AssertionError("Expected KeyError")


def test_snapshot_is_independent():
    port = ShadowTonePort()
    snapshot = port.snapshot()
    port.update(FSTEP=1234)
    assert snapshot["FSTEP"] == 0
    assert port.snapshot()["FSTEP"] == 1234


def test_enable_and_disable_fields():
    port = ShadowTonePort()
    port.enable_channel(Channel.CHANNEL_2)
    fields = port.snapshot()
    assert fields["TONE_EN"] == 1
    assert fields["CW_EN2"] == 1
    assert fields["OUT_EN2"] == 1
    assert fields["OUT_EN1"] == 0

    port.disable_channel(Channel.CHANNEL_2)
    fields = port.snapshot()
    assert fields["OUT_EN2"] == 0
    assert fields["CW_EN2"] == 1  # generator keeps running, only the pad is off


def test_channel_fields_and_latches():
    port = ShadowTonePort()
    port.set_channel_scale(Channel.CHANNEL_1, 2)
    port.set_channel_offset(Channel.CHANNEL_1, 128)
    port.set_channel_mode(Channel.CHANNEL_2, WaveformMode.INVERTED_SINE)
    port.latch_divisor_and_step(3, 1234)
    port.latch_frequency_step(4321)
    port.latch_clock_divisor(5)

    fields = port.snapshot()
    assert fields["SCALE1"] == 2
    assert fields["DC1"] == 128
    assert fields["INV2"] == 3
    assert fields["FSTEP"] == 4321
    assert fields["DIV_SEL"] == 5
    assert [name for name, _ in port.writes] == [
        "set_channel_scale",
        "set_channel_offset",
        "set_channel_mode",
        "latch_divisor_and_step",
        "latch_frequency_step",
        "latch_clock_divisor",
    ]


def test_model_search_reaches_shadow_registers():
    port = ShadowTonePort()
    model = FrequencySynthesisModel(port, 132.5)
    model.search_best_frequency(1000.0)

    fields = port.snapshot()
    assert fields["DIV_SEL"] == 1
    assert fields["FSTEP"] == 15
    assert port.writes[-1] == ("latch_divisor_and_step", (1, 15))
