"""
The Flutter project that exported code is written into.

Filesystem calls run through `asyncio.to_thread`.
"""

import asyncio
import logging
import re
from pathlib import Path
from typing import Optional, Union

from .proptype import ProjectProps

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

REQUIRED_PACKAGES = {
    'adobe_xd': 'package:adobe_xd/',
    'flutter_svg': 'package:flutter_svg/',
}


class ProjectError(Exception):
    """A project file could not be read or written."""


class ProjectFolder:
    """A directory inside the project, relative to its root."""

    def __init__(self, project: 'Project', path: str):
        self.project = project
        self.path = path

    @property
    def full_path(self) -> Path:
        return self.project.root / self.path

    async def write_file(self, name: str, content: str, ctx) -> Path:
        """Write `content` to `name` in this folder, creating directories as needed."""
        target = self.full_path / name
        try:
            await asyncio.to_thread(_write_text, target, content)
        except OSError as e:
            ctx.log.error(f"Unable to write '{name}': {e}")
            raise ProjectError(f"Unable to write {target}: {e}") from e
        self.project.written.append(target)
        logger.info("Wrote %s", target)
        return target


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding='utf-8')


class Project:

    def __init__(self, root: Optional[PathLike], code_path: str = "lib"):
        self.root = Path(root).expanduser() if root else None
        self.code = ProjectFolder(self, code_path or "lib")
        self.written = []

    @classmethod
    def from_props(cls, props: ProjectProps, root: Optional[PathLike] = None) -> 'Project':
        """Build a project from document settings. An explicit `root` wins over the stored export path."""
        return cls(root or props.export_path, props.code_path)

    async def check_root(self) -> bool:
        if self.root is None:
            return False
        return await asyncio.to_thread(self.root.is_dir)

    async def validate(self, ctx) -> None:
        """Warn when pubspec.yaml is missing or lacks packages the written code imports."""
        pubspec_path = self.root / 'pubspec.yaml'
        try:
            pubspec = await asyncio.to_thread(pubspec_path.read_text, encoding='utf-8')
        except FileNotFoundError:
            ctx.log.warn("Could not find a pubspec.yaml file in the project root.")
            return
        except OSError as e:
            ctx.log.warn(f"Unable to read pubspec.yaml: {e}")
            return

        used = await asyncio.to_thread(self._get_used_imports)
        for package, prefix in REQUIRED_PACKAGES.items():
            if prefix in used and not re.search(rf"^\s+{package}\s*:", pubspec, re.MULTILINE):
                ctx.log.warn(f"Add the '{package}' package to your pubspec.yaml dependencies.")

    def _get_used_imports(self) -> str:
        result = ''
        for path in self.written:
            if path.suffix == '.dart' and path.exists():
                result += path.read_text(encoding='utf-8')
        return result
