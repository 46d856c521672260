"""Hatchling build hook that embeds git build info in the package."""

from __future__ import annotations

import importlib.util
from pathlib import Path
from typing import Any

from hatchling.builders.hooks.plugin.interface import BuildHookInterface


def _load_writer(root: Path):
    script = root / "build_tools" / "write_build_info.py"
    spec = importlib.util.spec_from_file_location("write_build_info", script)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class CustomBuildHook(BuildHookInterface):

    def initialize(self, version: str, build_data: dict[str, Any]) -> None:
        root = Path(self.root)
        target = _load_writer(root).write_build_info(root)
        build_data.setdefault("artifacts", []).append(
            target.relative_to(root).as_posix()
        )
