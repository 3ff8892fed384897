from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

from .constants import EditorConstants

VERSION = EditorConstants.VERSION


class BuildInfo(NamedTuple):
    commit: Optional[str]
    date: Optional[str]
    dirty: bool


def _run_git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL
        )
        return out.decode().strip() or None
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None


def _from_git_repo() -> Optional[BuildInfo]:
    here = Path(__file__).resolve().parent
    top = _run_git(["rev-parse", "--show-toplevel"], cwd=here)
    if not top:
        return None
    root = Path(top)
    # Only trust the repository that actually contains this package
    if here.parent != root:
        return None

    commit = _run_git(["rev-parse", "HEAD"], cwd=root)
    date = _run_git(["show", "-s", "--format=%cI", "HEAD"], cwd=root)
    status = _run_git(["status", "--porcelain"], cwd=root)
    return BuildInfo(commit=commit, date=date, dirty=bool(status))


def _from_embedded_file() -> Optional[BuildInfo]:
    # Generated at build time by hatch build hook
    try:
        from . import _build_info  # type: ignore
    except ImportError:
        return None
    commit = getattr(_build_info, "COMMIT", None)
    date = getattr(_build_info, "DATE", None)
    if commit or date:
        return BuildInfo(commit=commit, date=date, dirty=False)
    return None


def get_build_info() -> BuildInfo:
    # Priority: live git checkout -> embedded file -> unknown
    for getter in (_from_git_repo, _from_embedded_file):
        info = getter()
        if info and (info.commit or info.date):
            return info
    return BuildInfo(commit=None, date=None, dirty=False)


def get_installed_version() -> str:
    """Version of the installed distribution, or the source constant."""
    try:
        return importlib.metadata.version(EditorConstants.PRODUCT_NAME)
    except importlib.metadata.PackageNotFoundError:
        return VERSION


def get_version_string() -> str:
    info = get_build_info()
    version = get_installed_version()
    if info.commit is None and info.date is None:
        return f"{EditorConstants.PRODUCT_NAME} {version}"
    dirty_suffix = "-dirty" if info.dirty else ""
    # Use short (7-character) git hashes when available
    commit = info.commit[:7] if info.commit else "unknown"
    date = info.date or "unknown"
    return f"{EditorConstants.PRODUCT_NAME} {version} ({commit}{dirty_suffix} {date})"
