"""Hatchling build hook that embeds the git commit into the package."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

from hatchling.builders.hooks.plugin.interface import BuildHookInterface

BUILD_INFO_RELPATH = "eep/_build_info.py"


class CustomBuildHook(BuildHookInterface):
    """Writes eep/_build_info.py before the wheel is assembled."""

    def initialize(self, version: str, build_data: dict[str, Any]) -> None:
        self._write_build_info(Path(self.root))
        build_data.setdefault("artifacts", []).append(BUILD_INFO_RELPATH)

    def _write_build_info(self, project_root: Path) -> None:
        commit = self._run_git(["rev-parse", "HEAD"], cwd=project_root)
        date = self._run_git(["show", "-s", "--format=%cI", "HEAD"], cwd=project_root)
        (project_root / BUILD_INFO_RELPATH).write_text(
            "# Auto-generated at build time.\n"
            f"COMMIT = {commit!r}\n"
            f"DATE = {date!r}\n",
            encoding="utf-8",
        )

    def _run_git(self, args: list[str], cwd: Path) -> str | None:
        try:
            out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
        except (subprocess.CalledProcessError, FileNotFoundError, OSError):
            # A build outside a checkout still succeeds, with unknown commit
            return None
        return out.decode().strip() or None
