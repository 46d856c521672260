from __future__ import annotations

import importlib.metadata
import json
import os
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

from .constants import EditorConstants

DIST_NAME = "lined"


class BuildInfo(NamedTuple):
    commit: Optional[str]
    date: Optional[str]
    dirty: bool


def _run_git(args: list[str], cwd: Optional[str] = None) -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", *args], cwd=cwd or os.getcwd(), stderr=subprocess.DEVNULL
        )
        return out.decode().strip() or None
    except (subprocess.CalledProcessError, OSError):
        return None


def _from_git_repo() -> Optional[BuildInfo]:
    here = Path(__file__).resolve().parent
    top = _run_git(["rev-parse", "--show-toplevel"], cwd=str(here))
    if not top or not Path(top).exists():
        return None

    commit = _run_git(["rev-parse", "HEAD"], cwd=top)
    date = _run_git(["show", "-s", "--format=%cI", "HEAD"], cwd=top)
    status = _run_git(["status", "--porcelain"], cwd=top)
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


def _from_direct_url() -> Optional[BuildInfo]:
    # PEP 610 direct_url.json may contain VCS commit id when installed from VCS
    try:
        dist = importlib.metadata.distribution(DIST_NAME)
    except importlib.metadata.PackageNotFoundError:
        return None
    for file in dist.files or []:
        if file.name == "direct_url.json" and file.parent and file.parent.name.endswith(".dist-info"):
            try:
                with Path(dist.locate_file(file)).open("r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, ValueError):
                return None
            commit = (data.get("vcs_info") or {}).get("commit_id")
            if commit:
                return BuildInfo(commit=commit, date=None, dirty=False)
    return None


def get_build_info() -> BuildInfo:
    # Priority: live git repo -> embedded file -> direct_url.json -> unknowns
    for getter in (_from_git_repo, _from_embedded_file, _from_direct_url):
        info = getter()
        if info and (info.commit or info.date):
            return info
    return BuildInfo(commit=None, date=None, dirty=False)


def get_package_version() -> str:
    try:
        return importlib.metadata.version(DIST_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_version_string() -> str:
    """Short ``<commit>[-dirty] <date>`` build identifier."""
    info = get_build_info()
    dirty_suffix = "-dirty" if info.dirty else ""
    commit_full = info.commit or "unknown"
    # Use short (7-character) git hashes when available
    commit = commit_full[:7] if commit_full != "unknown" else commit_full
    date = info.date or "unknown"
    return f"{commit}{dirty_suffix} {date}"


def version_text() -> str:
    """Text printed by ``--version``."""
    name = EditorConstants.PROGRAM_NAME
    return (
        f"{name} {get_package_version()} ({get_version_string()})\n"
        f"Copyright (C) {EditorConstants.PROGRAM_YEAR} the {name} authors.\n"
        "License GPLv2+: GNU GPL version 2 or later <http://gnu.org/licenses/gpl.html>\n"
        "This is free software: you are free to change and redistribute it.\n"
        "There is NO WARRANTY, to the extent permitted by law.\n"
    )
