"""
Resolve the ``DENSCOPE_*`` variables that configure the client.

Sources are layered as process environment, then a ``.env`` file filling
only missing keys, then explicit overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

__all__ = ["build_environment", "read_env_file"]

_QUOTES = ("'", '"')


def _split_assignment(line: str) -> Optional[Tuple[str, str]]:
    line = line.strip()
    if line.startswith("export "):
        line = line[len("export "):].lstrip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, value = (part.strip() for part in line.split("=", 1))
    if not key:
        return None
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        value = value[1:-1]
    return key, value


def read_env_file(path: str) -> Dict[str, str]:
    """Return the assignments in ``path``, or an empty dict when it does not exist."""
    env_path = Path(path)
    if not env_path.is_file():
        return {}
    assignments = (
        _split_assignment(line)
        for line in env_path.read_text(encoding="utf-8").splitlines()
    )
    return dict(item for item in assignments if item is not None)


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Merge configuration sources into one mapping.

    ``base`` defaults to :data:`os.environ`. Keys from ``env_file`` never
    replace a ``base`` value, and ``env_file=None`` skips the file.
    ``overrides`` always win.
    """
    variables = dict(os.environ if base is None else base)
    if env_file is not None:
        for key, value in read_env_file(env_file).items():
            variables.setdefault(key, value)
    variables.update(overrides or {})
    return variables
