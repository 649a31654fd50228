from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

from .constants import EditorConstants


class BuildInfo(NamedTuple):
    version: Optional[str]
    commit: Optional[str]
    dirty: bool


def _run_git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
        return out.decode().strip() or None
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None


def _installed_version() -> Optional[str]:
    try:
        return importlib.metadata.version(EditorConstants.APP_NAME)
    except importlib.metadata.PackageNotFoundError:
        return None


def get_build_info() -> BuildInfo:
    # Only a source checkout has a commit; installed wheels report the version alone
    here = Path(__file__).resolve().parent
    commit = _run_git(["rev-parse", "HEAD"], cwd=here)
    dirty = False
    if commit:
        status = _run_git(["status", "--porcelain"], cwd=here)
        dirty = bool(status)
    return BuildInfo(version=_installed_version(), commit=commit, dirty=dirty)


def get_version_string() -> str:
    info = get_build_info()
    version = info.version or "unknown"
    if not info.commit:
        return version
    dirty_suffix = "-dirty" if info.dirty else ""
    return f"{version} ({info.commit[:7]}{dirty_suffix})"
