# src/hamming/registry.py
from __future__ import annotations

import inspect
from collections import OrderedDict
from dataclasses import dataclass
from functools import lru_cache
from importlib import import_module
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path

from hamming.errors import UserInputError


@dataclass(frozen=True)
class SolverInfo:
    name: str
    cls: type
    description: str
    exact: bool          # True if the result is symbolic (no width limit)


def _is_solver(obj) -> bool:
    return inspect.isclass(obj) and getattr(obj, "__is_solver__", False)


# ---------- Decorator (only tags the class; no side effects) ----------


def solver(*, name: str, description: str = "", exact: bool = True):
    def deco(cls):
        cls.__is_solver__ = True
        cls.name = name
        cls.description = description
        cls.exact = exact
        return cls
    return deco


@lru_cache(maxsize=1)
def discover() -> OrderedDict[str, SolverInfo]:
    """Collect tagged solver classes from hamming.solvers.*, in file order."""
    found: OrderedDict[str, SolverInfo] = OrderedDict()
    pkg_dir = pkg_files("hamming") / "solvers"
    with as_file(pkg_dir) as real:
        for file in sorted(Path(real).glob("*.py")):
            if file.name == "__init__.py":
                continue
            mod = import_module(f"hamming.solvers.{file.stem}")
            for _, obj in inspect.getmembers(mod, _is_solver):
                # skip classes merely imported into the module
                if obj.__module__ != mod.__name__ or obj.name in found:
                    continue
                found[obj.name] = SolverInfo(obj.name, obj, obj.description, obj.exact)
    return found


def get_solver(name: str) -> SolverInfo:
    solvers = discover()
    try:
        return solvers[name]
    except KeyError:
        raise UserInputError(
            f"unknown solver '{name}' (choose from: {', '.join(solvers)})"
        ) from None
