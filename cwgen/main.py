"""Application bootstrap for the cwgen control panel."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from PySide6.QtWidgets import (
    QApplication,
    QLabel,
    QMainWindow,
    QMenu,
    QMenuBar,
    QMessageBox,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from cwgen import __version__
from cwgen.config import GeneratorConfig
from cwgen.hw import Channel, ShadowTonePort, channel_from_int, mode_from_int
from cwgen.models import FrequencySynthesisModel, MatchPolicy
from cwgen.ui import GeneratorPanel

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """cwgen main window: one generator panel plus the register shadow."""

    def __init__(self, config: Optional[GeneratorConfig] = None) -> None:
        super().__init__()
        self.config = config or GeneratorConfig()

        # Models (domain layer - pure data)
        self.port = ShadowTonePort()
        self.model = FrequencySynthesisModel(
            self.port, self.config.reference_frequency, self.config.tolerance
        )
        self.policy = self.config.policy
        self.channel: Channel = self.config.channel
        self.model.enable(self.channel)

        self.setMinimumSize(420, 640)
        self.setWindowTitle(f"cwgen {__version__}")

        self._create_actions()
        self._create_menus()
        self._create_status_bar()
        self._create_central()
        self._connect_signals()
        self._refresh()

    # UI Construction -------------------------------------------------
    def _create_actions(self) -> None:
        self.action_dump = self._make_action("Show &Diagnostics", "Ctrl+D", self._on_show_diagnostics)
        self.action_quit = self._make_action("&Quit", "Ctrl+Q", self.close)

    def _create_menus(self) -> None:
        menubar = QMenuBar(self)
        file_menu = QMenu("&File", self)
        file_menu.addAction(self.action_dump)
        file_menu.addSeparator()
        file_menu.addAction(self.action_quit)
        menubar.addMenu(file_menu)
        self.setMenuBar(menubar)

    def _create_status_bar(self) -> None:
        status = QStatusBar()
        status.showMessage("Ready")
        self.setStatusBar(status)

    def _create_central(self) -> None:
        container = QWidget()
        layout = QVBoxLayout(container)

        self.panel = GeneratorPanel()
        self.panel.channel_combo.setCurrentIndex(self.channel.index)
        optimal = self.policy is MatchPolicy.OPTIMAL
        self.panel.policy_btn.setChecked(optimal)
        self.panel.policy_btn.setText("Optimal match" if optimal else "Best match")
        layout.addWidget(self.panel)

        self.register_label = QLabel()
        self.register_label.setStyleSheet("font-family: monospace; color: gray;")
        self.register_label.setWordWrap(True)
        layout.addWidget(self.register_label)

        self.setCentralWidget(container)

    def _connect_signals(self) -> None:
        panel = self.panel
        panel.frequency_requested.connect(self._on_frequency_requested)
        panel.reference_changed.connect(self._on_reference_changed)
        panel.divisor_changed.connect(self._on_divisor_changed)
        panel.step_changed.connect(self._on_step_changed)
        panel.tolerance_changed.connect(self._on_tolerance_changed)
        panel.policy_changed.connect(self._on_policy_changed)
        panel.channel_selected.connect(self._on_channel_selected)
        panel.mode_changed.connect(self._on_mode_changed)
        panel.scale_changed.connect(self._on_scale_changed)
        panel.offset_changed.connect(self._on_offset_changed)
        panel.output_toggled.connect(self._on_output_toggled)

    def _make_action(self, text: str, shortcut: str, handler):
        action = self.addAction(text)
        action.setShortcut(shortcut)
        action.triggered.connect(handler)
        return action

    # Model updates ---------------------------------------------------
    def _refresh(self, tolerance_met: Optional[bool] = None) -> None:
        self.panel.set_state(
            self.model.snapshot(), self.model.channel(self.channel), tolerance_met
        )
        fields = self.port.snapshot()
        self.register_label.setText(" ".join(f"{name}={value}" for name, value in fields.items()))

    def _on_frequency_requested(self, frequency: float) -> None:
        result = self.model.search_best_frequency(frequency, self.policy)
        self._refresh(result.tolerance_met)
        self.statusBar().showMessage(
            f"Divider={result.divisor} / step={result.step}", 3000
        )

    def _on_reference_changed(self, reference: float) -> None:
        self.model.set_reference_frequency(reference)
        self._refresh()

    def _on_divisor_changed(self, divisor: int) -> None:
        self.model.set_clock_divisor(divisor)
        self._refresh()

    def _on_step_changed(self, step: int) -> None:
        self.model.set_frequency_step(step)
        self._refresh()

    def _on_tolerance_changed(self, tolerance: int) -> None:
        self.model.set_tolerance(tolerance)
        self._refresh()

    def _on_policy_changed(self, optimal: bool) -> None:
        self.policy = MatchPolicy.OPTIMAL if optimal else MatchPolicy.BEST
        self.statusBar().showMessage(f"{self.policy.value.capitalize()} match", 2000)

    def _on_channel_selected(self, number: int) -> None:
        self.channel = channel_from_int(number)
        self._refresh()

    def _on_mode_changed(self, mode: int) -> None:
        self.model.set_mode(self.channel, mode_from_int(mode))
        logger.info(f"Set mode of {self.channel.name} to {mode}")
        self._refresh()

    def _on_scale_changed(self, scale: int) -> None:
        self.model.set_scale(self.channel, scale)
        self._refresh()

    def _on_offset_changed(self, offset: int) -> None:
        self.model.set_offset(self.channel, offset)
        self._refresh()

    def _on_output_toggled(self, enabled: bool) -> None:
        if enabled != self.model.is_enabled(self.channel):
            self.model.toggle(self.channel)
        self._refresh()

    def _on_show_diagnostics(self) -> None:
        text = self.model.describe()
        logger.info(f"Generator state:\n{text}")
        QMessageBox.information(self, "Generator State", text)


def run(
    app: Optional[QApplication] = None,
    config: Optional[GeneratorConfig] = None,
    frequency: Optional[float] = None,
) -> int:
    """Launch the PySide6 event loop."""

    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    should_cleanup = False
    if app is None:
        app = QApplication(sys.argv)
        should_cleanup = True

    window = MainWindow(config)
    if frequency is not None:
        window._on_frequency_requested(frequency)
    window.show()
    exit_code = app.exec()

    if should_cleanup:
        del app

    return exit_code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(run())
