"""
Environment resolution for the gateway configuration.

Values come from three layers: the process environment (or an explicit
``base`` mapping), an optional ``.env`` file that only fills in missing keys,
and explicit overrides that always win. The result is a plain mapping handed
to :class:`paypal_checkout.core.config.GatewayConfig`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, MutableMapping, Optional

__all__ = ["GatewayEnvironment", "build_environment", "load_env_file"]


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _parse_env_file(path: Path) -> Dict[str, str]:
    entries: Dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return entries

    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        name, value = line.split("=", 1)
        name = name.strip()
        if name:
            entries[name] = _unquote(value.strip())
    return entries


def load_env_file(
    path: str = ".env",
    *,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Copy the entries of ``path`` into ``environ`` (default :data:`os.environ`)
    without replacing keys that are already set, and return the merged view.
    """
    target: MutableMapping[str, str] = environ if environ is not None else os.environ
    for name, value in _parse_env_file(Path(path)).items():
        target.setdefault(name, value)
    return dict(target)


@dataclass(frozen=True)
class GatewayEnvironment:
    variables: Mapping[str, str]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)

    def first(self, *keys: str) -> Optional[str]:
        """Return the first non-empty value among ``keys``."""
        for key in keys:
            value = self.variables.get(key)
            if value:
                return value
        return None


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> GatewayEnvironment:
    """
    Resolve the layered environment.

    ``base`` defaults to :data:`os.environ`; pass ``env_file=None`` to skip the
    file lookup. ``overrides`` are applied last.
    """
    merged: Dict[str, str] = dict(os.environ if base is None else base)

    if env_file is not None:
        for name, value in _parse_env_file(Path(env_file)).items():
            merged.setdefault(name, value)

    if overrides:
        merged.update(overrides)

    return GatewayEnvironment(variables=merged)
