"""
Repository-level pytest hook: lets ``ppe_monitor`` and ``tests.helpers``
import from a plain checkout without ``pip install -e .``.
"""
import sys
from pathlib import Path

_repo_root = str(Path(__file__).resolve().parent)
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)
