from __future__ import annotations

import os
from importlib.resources import files as pkg_files
from pathlib import Path


def workspace_dir() -> Path:
    """$HAMMING_HOME, else ~/Documents/Hamming."""
    env = os.environ.get("HAMMING_HOME")
    root = Path(env).expanduser() if env else Path.home() / "Documents" / "Hamming"
    return root.resolve()


def packaged_profiles() -> list[str]:
    """File names of the profiles shipped inside the package."""
    src = pkg_files("hamming") / "profiles"
    return sorted(
        entry.name for entry in src.iterdir()
        if entry.is_file() and entry.name.endswith(".toml") and not entry.name.startswith(".")
    )


def seed_workspace(*, overwrite: bool = False) -> tuple[Path, dict[str, int]]:
    """
    Write the packaged profiles into <workspace>/profiles.

    Existing files are kept unless `overwrite` is set, so user edits survive
    an upgrade. Returns (workspace_path, {"profiles": files_written}).
    """
    root = workspace_dir()
    dst = root / "profiles"
    dst.mkdir(parents=True, exist_ok=True)
    src = pkg_files("hamming") / "profiles"

    written = 0
    for name in packaged_profiles():
        target = dst / name
        if target.exists() and not overwrite:
            continue
        target.write_bytes((src / name).read_bytes())
        written += 1
    return root, {"profiles": written}


def ensure_workspace_seeded() -> tuple[Path, bool, dict[str, int]]:
    root, copied = seed_workspace(overwrite=False)
    return root, any(copied.values()), copied
