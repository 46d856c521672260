"""Write lined/_build_info.py with the commit and date of the checkout."""

from __future__ import annotations

import subprocess
from pathlib import Path

TARGET = Path("lined") / "_build_info.py"


def _run_git(args: list[str], cwd: Path) -> str | None:
    try:
        out = subprocess.check_output(
            ["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL
        )
        return out.decode().strip() or None
    except (subprocess.CalledProcessError, OSError):
        # Building from an sdist or without git: record unknowns
        return None


def write_build_info(project_root: Path) -> Path:
    commit = _run_git(["rev-parse", "HEAD"], cwd=project_root)
    date = _run_git(["show", "-s", "--format=%cI", "HEAD"], cwd=project_root)

    target_path = project_root / TARGET
    target_path.write_text(
        "# Auto-generated at build time.\n"
        f"COMMIT = {commit!r}\n"
        f"DATE = {date!r}\n",
        encoding="utf-8",
    )
    return target_path


def main() -> None:
    write_build_info(Path(__file__).resolve().parents[1])


if __name__ == "__main__":
    main()
