"""Top-level pytest configuration.

Qt must run headless before any test module imports PySide6, including
modules that live outside the ``tests`` directory. The concrete
QApplication fixture remains in ``tests/conftest.py``.
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
