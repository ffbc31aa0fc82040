# runtime.py
from __future__ import annotations

import sys
from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

from colorama import Style

# profile key -> Runtime attribute; only real booleans are taken over
_FLAG_KEYS = {
    "BEHAVIOUR.DEBUG": "debug",
    "BEHAVIOUR.PROGRESS": "progress",
}


@dataclass
class Runtime:
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False     # [debug] lines and full tracebacks
    progress: bool = True   # live progress bar for long solves

    def apply(self, settings: Any) -> None:
        """Install a loaded profile (config.Settings) or a plain nested dict."""
        if isinstance(settings, Mapping):
            self.profile_name = "default"
            self.settings = dict(settings)
        else:
            self.profile_name = settings.name
            self.settings = dict(settings.as_dict())

        for key, attr in _FLAG_KEYS.items():
            value = self.get(key)
            if isinstance(value, bool):
                setattr(self, attr, value)

    def get(self, key: str, default: Any = None) -> Any:
        """Dotted lookup into the nested settings, e.g. 'BOUNDED.WORD_BITS'."""
        cur: Any = self.settings
        for part in key.split("."):
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("hamming_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


def reset() -> None:
    _current_runtime.set(None)


def APPLY(settings: Any) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)


def debug(msg: str) -> None:
    if current().debug:
        print(f"{Style.DIM}[debug]{Style.RESET_ALL} {msg}", file=sys.stderr)
