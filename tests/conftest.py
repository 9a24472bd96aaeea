"""
conftest.py – put ``tests/`` on sys.path so ``from _helpers import …`` works.

No network access is used anywhere in the suite; market-data calls are
patched at the client boundary.
"""

import pathlib
import sys

_tests_dir = str(pathlib.Path(__file__).resolve().parent)
if _tests_dir not in sys.path:
    sys.path.insert(0, _tests_dir)
