"""Widget for editing cosine wave generator parameters."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QComboBox,
    QDoubleSpinBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSlider,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from ..hw.utils import (
    MAX_DIVISOR,
    MAX_OFFSET,
    MAX_REFERENCE_HZ,
    MAX_SCALE,
    MAX_STEP,
    MAX_TOLERANCE,
    MIN_DIVISOR,
    MIN_OFFSET,
    MIN_REFERENCE_HZ,
    MIN_SCALE,
    MIN_STEP,
    MIN_TOLERANCE,
)
from ..models import ChannelState, SynthesisParameters

# Operator input ranges
MIN_FREQUENCY = 15.0
MAX_FREQUENCY = 8_000_000.0

_TOGGLE_STYLE = """
    QPushButton {
        background-color: palette(button);
        border: 1px solid palette(mid);
        padding: 4px;
    }
    QPushButton:checked {
        background-color: #388e3c;
        color: white;
        border: 1px solid #2e7d32;
    }
    QPushButton:checked:hover {
        background-color: #4caf50;
    }
"""


class GeneratorPanel(QGroupBox):
    """UI for the CW generator - emits high-level signals.

    Signals carry domain values (Hz, divisor, step, mode number) and the
    window applies them to FrequencySynthesisModel. The panel never talks to
    the hardware port.
    """

    frequency_requested = Signal(float)
    reference_changed = Signal(float)
    divisor_changed = Signal(int)
    step_changed = Signal(int)
    tolerance_changed = Signal(int)
    policy_changed = Signal(bool)  # True = optimal match
    channel_selected = Signal(int)  # 1 or 2
    mode_changed = Signal(int)  # 0-3
    scale_changed = Signal(int)
    offset_changed = Signal(int)
    output_toggled = Signal(bool)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setTitle("Cosine Wave Generator")
        self._last_frequency_text = ""

        main_layout = QVBoxLayout(self)
        formula = QLabel("f = f0 * step / (1 + divider)")
        formula.setStyleSheet("color: gray;")
        main_layout.addWidget(formula)

        # === Frequency parameters (shared by both channels) ===
        form = QFormLayout()

        self.freq_input = QLineEdit()
        self.freq_input.setMaximumWidth(160)
        self.freq_input.editingFinished.connect(self._on_freq_input_changed)
        form.addRow("f [Hz]", self.freq_input)

        self.f0_spin = QDoubleSpinBox()
        self.f0_spin.setRange(MIN_REFERENCE_HZ, MAX_REFERENCE_HZ)
        self.f0_spin.setDecimals(4)
        self.f0_spin.editingFinished.connect(
            lambda: self.reference_changed.emit(self.f0_spin.value())
        )
        form.addRow("f0 [Hz]", self.f0_spin)

        self.divisor_spin = QSpinBox()
        self.divisor_spin.setRange(MIN_DIVISOR, MAX_DIVISOR)
        self.divisor_spin.valueChanged.connect(self.divisor_changed)
        form.addRow(f"Divider {MIN_DIVISOR}..{MAX_DIVISOR}", self.divisor_spin)

        self.step_spin = QSpinBox()
        self.step_spin.setRange(MIN_STEP, MAX_STEP)
        self.step_spin.editingFinished.connect(
            lambda: self.step_changed.emit(self.step_spin.value())
        )
        form.addRow(f"Step {MIN_STEP}..{MAX_STEP}", self.step_spin)

        self.tolerance_spin = QSpinBox()
        self.tolerance_spin.setRange(MIN_TOLERANCE, MAX_TOLERANCE)
        self.tolerance_spin.setSuffix(" ‰")
        self.tolerance_spin.valueChanged.connect(self.tolerance_changed)
        form.addRow("Tolerance", self.tolerance_spin)

        main_layout.addLayout(form)

        self.policy_btn = QPushButton("Optimal match")
        self.policy_btn.setCheckable(True)
        self.policy_btn.setChecked(True)
        self.policy_btn.setStyleSheet(_TOGGLE_STYLE)
        self.policy_btn.toggled.connect(self._on_policy_toggled)
        main_layout.addWidget(self.policy_btn)

        # === Read-outs ===
        self.actual_label = QLabel("Actual: -")
        self.deviation_label = QLabel("Deviation: -")
        self.match_label = QLabel("")
        for label in (self.actual_label, self.deviation_label, self.match_label):
            main_layout.addWidget(label)

        # === Channel settings ===
        channel_box = QGroupBox("Output")
        channel_form = QFormLayout(channel_box)

        self.channel_combo = QComboBox()
        self.channel_combo.addItem("Channel 1", 1)
        self.channel_combo.addItem("Channel 2", 2)
        self.channel_combo.currentIndexChanged.connect(
            lambda index: self.channel_selected.emit(self.channel_combo.itemData(index))
        )
        channel_form.addRow("Channel", self.channel_combo)

        self.mode_spin = QSpinBox()
        self.mode_spin.setRange(0, 3)
        self.mode_spin.valueChanged.connect(self.mode_changed)
        channel_form.addRow("Mode 0..3", self.mode_spin)

        self.scale_spin = QSpinBox()
        self.scale_spin.setRange(MIN_SCALE, MAX_SCALE)
        self.scale_spin.valueChanged.connect(self.scale_changed)
        channel_form.addRow("Scale (2^-n)", self.scale_spin)

        offset_row = QHBoxLayout()
        self.offset_slider = QSlider(Qt.Horizontal)
        self.offset_slider.setRange(MIN_OFFSET, MAX_OFFSET)
        self.offset_slider.valueChanged.connect(self._on_offset_changed)
        self.offset_label = QLabel("0")
        self.offset_label.setMinimumWidth(30)
        offset_row.addWidget(self.offset_slider)
        offset_row.addWidget(self.offset_label)
        channel_form.addRow("Offset", offset_row)

        self.output_btn = QPushButton("Output")
        self.output_btn.setCheckable(True)
        self.output_btn.setStyleSheet(_TOGGLE_STYLE)
        self.output_btn.toggled.connect(self.output_toggled)
        channel_form.addRow(self.output_btn)

        main_layout.addWidget(channel_box)
        main_layout.addStretch()

    def _on_freq_input_changed(self) -> None:
        """Frequency text entered - clamp and emit the request."""
        try:
            value = float(self.freq_input.text())
        except ValueError:
            # Invalid input - restore the last value shown
            self.freq_input.setText(self._last_frequency_text)
            return
        value = max(MIN_FREQUENCY, min(MAX_FREQUENCY, value))
        self.frequency_requested.emit(value)

    def _on_policy_toggled(self, optimal: bool) -> None:
        self.policy_btn.setText("Optimal match" if optimal else "Best match")
        self.policy_changed.emit(optimal)

    def _on_offset_changed(self, value: int) -> None:
        self.offset_label.setText(str(value))
        self.offset_changed.emit(value)

    def set_state(
        self,
        params: SynthesisParameters,
        channel: ChannelState,
        tolerance_met: Optional[bool] = None,
    ) -> None:
        """Update UI from the model.

        Args:
            params: Frequency state snapshot
            channel: Settings of the selected channel
            tolerance_met: Outcome of the last search, None if not a search
        """
        widgets = (
            self.freq_input,
            self.f0_spin,
            self.divisor_spin,
            self.step_spin,
            self.tolerance_spin,
            self.mode_spin,
            self.scale_spin,
            self.offset_slider,
            self.output_btn,
        )
        # Block signals to avoid feedback loop
        for widget in widgets:
            widget.blockSignals(True)

        self._last_frequency_text = f"{params.actual_frequency:.4f}"
        self.freq_input.setText(self._last_frequency_text)
        self.f0_spin.setValue(params.reference_frequency)
        self.divisor_spin.setValue(params.divisor)
        self.step_spin.setValue(params.step)
        self.tolerance_spin.setValue(params.tolerance)
        self.mode_spin.setValue(channel.mode.value)
        self.scale_spin.setValue(channel.scale)
        self.offset_slider.setValue(channel.offset)
        self.offset_label.setText(str(channel.offset))
        self.output_btn.setChecked(channel.enabled)

        for widget in widgets:
            widget.blockSignals(False)

        self.actual_label.setText(f"Actual: {params.actual_frequency:.4f} Hz")
        self.deviation_label.setText(f"Deviation: {params.deviation:+.4f} Hz")
        if tolerance_met is True:
            self.match_label.setText("Within tolerance")
            self.match_label.setStyleSheet("color: #388e3c;")
        elif tolerance_met is False:
            self.match_label.setText("Tolerance not met - best approximation set")
            self.match_label.setStyleSheet("color: #d32f2f;")


__all__ = ["GeneratorPanel"]
