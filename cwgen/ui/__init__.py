"""PySide6 widgets for the cwgen control panel."""

from .generator_panel import GeneratorPanel

__all__ = ["GeneratorPanel"]
