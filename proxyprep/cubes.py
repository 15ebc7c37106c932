"""Discovery and caching of colour-correction cubes."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from .settings import AppSettings

NO_CUBE = "None"
CUBE_SUFFIX = "cube"

CubeLoader = Callable[[Path], Any]


def _base_name(path: Path) -> str:
    return path.name.split(".", 1)[0]


def _suffix(path: Path) -> str:
    name = path.name
    return name.rsplit(".", 1)[1] if "." in name else ""


def list_cube_names(cube_dirs: Iterable[str | Path]) -> list[str]:
    """``"None"`` followed by the names of the ``.cube`` files in ``cube_dirs``.

    Directories are searched in order; a name found twice is listed once.
    """
    names = [NO_CUBE]
    for cube_dir in map(Path, cube_dirs):
        if not cube_dir.is_dir():
            continue
        for entry in sorted(cube_dir.iterdir()):
            if not entry.is_file() or _suffix(entry).lower() != CUBE_SUFFIX:
                continue
            name = _base_name(entry)
            if name not in names:
                names.append(name)
    return names


def find_cube_path(cube_name: str, cube_dirs: Iterable[str | Path]) -> Path:
    """Path of the cube file called ``cube_name`` in the first directory holding it.

    Raises ``FileNotFoundError`` when no directory holds it.
    """
    wanted = f"{cube_name}.{CUBE_SUFFIX}".lower()
    searched: list[Path] = []
    for cube_dir in map(Path, cube_dirs):
        searched.append(cube_dir)
        if not cube_dir.is_dir():
            continue
        exact = cube_dir / f"{cube_name}.CUBE"
        if exact.is_file():
            return exact
        for entry in sorted(cube_dir.iterdir()):
            if entry.is_file() and entry.name.lower() == wanted:
                return entry
    raise FileNotFoundError(
        f"no cube named {cube_name!r} in {', '.join(map(str, searched)) or 'no folder'}"
    )


def preload_cube(
    settings: AppSettings,
    cube_name: str,
    loader: CubeLoader,
    cube_dirs: Iterable[str | Path],
) -> None:
    """Load ``cube_name`` with ``loader`` and cache it, unless already cached."""
    if cube_name == NO_CUBE or settings.get_cube(cube_name) is not None:
        return
    path = find_cube_path(cube_name, cube_dirs)
    settings.set_cube(cube_name, loader(path))


def get_cube_image(
    settings: AppSettings,
    cube_name: str,
    loader: CubeLoader,
    cube_dirs: Iterable[str | Path],
) -> Any | None:
    """The cube called ``cube_name``, loading it on first use; ``None`` for no cube."""
    preload_cube(settings, cube_name, loader, cube_dirs)
    return settings.get_cube(cube_name)