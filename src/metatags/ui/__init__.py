"""UI-facing models and controllers plus the PySide6 main window."""
