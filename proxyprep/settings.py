"""Persistent application settings and the shared colour-cube cache."""

from __future__ import annotations

import base64
import json
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

USER_FOLDERS: tuple[str, ...] = ("res/cubes", "res/styles", "res/base_pdfs")
VISIBILITY_GROUP = "ObjectVisibility"
DEFAULT_THEME = "Default"
DEFAULT_VISIBILITIES: dict[str, bool] = {
    "Guides Options": False,
    "Global Config": False,
}


def ensure_user_folders(root: str | Path = ".") -> list[Path]:
    """Create the folders for user content below ``root`` and return them."""
    folders = [Path(root) / folder for folder in USER_FOLDERS]
    for folder in folders:
        folder.mkdir(parents=True, exist_ok=True)
    return folders


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1")
    return bool(value)


def _decode_bytes(value: Any) -> bytes:
    if not isinstance(value, str) or not value:
        return b""
    return base64.b64decode(value)


@dataclass
class AppSettings:
    """Settings that outlive one run of the application."""

    project_path: Path = field(default_factory=lambda: Path.cwd() / "proj.json")
    theme: str = DEFAULT_THEME
    window_geometry: bytes | None = None
    window_state: bytes | None = None
    object_visibilities: dict[str, bool] = field(default_factory=dict)
    _cubes: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)
    _cubes_lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def set_cube(self, cube_name: str, cube: Any) -> None:
        """Cache ``cube`` under ``cube_name`` unless one is cached already."""
        with self._cubes_lock:
            self._cubes.setdefault(cube_name, cube)

    def get_cube(self, cube_name: str) -> Any | None:
        """The cached cube called ``cube_name``, or ``None``."""
        with self._cubes_lock:
            return self._cubes.get(cube_name)

    def object_visibility(self, object_name: str) -> bool:
        """Whether the named panel is shown; panels are shown by default."""
        return self.object_visibilities.get(object_name, True)

    def set_object_visibility(self, object_name: str, visible: bool) -> None:
        self.object_visibilities[object_name] = visible

    def load(self, path: str | Path) -> None:
        """Read settings written by :meth:`save`; a missing file changes nothing."""
        path = Path(path)
        if not path.is_file():
            return
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict) or "version" not in data:
            return

        self.window_geometry = _decode_bytes(data.get("geometry"))
        self.window_state = _decode_bytes(data.get("state"))
        self.project_path = Path(str(data.get("json", "")))
        self.theme = str(data.get("theme", DEFAULT_THEME))

        group_key = next(
            (key for key in data if key.lower() == VISIBILITY_GROUP.lower()), None
        )
        group = data.get(group_key) if group_key is not None else None
        if isinstance(group, dict):
            for name, visible in group.items():
                self.object_visibilities[name] = _to_bool(visible)
        else:
            self.object_visibilities = dict(DEFAULT_VISIBILITIES)

    def save(self, path: str | Path, version: str) -> None:
        """Write the settings to ``path``, tagged with the program ``version``."""
        data = {
            "version": version,
            "geometry": base64.b64encode(self.window_geometry or b"").decode("ascii"),
            "state": base64.b64encode(self.window_state or b"").decode("ascii"),
            "json": str(self.project_path),
            "theme": self.theme,
            VISIBILITY_GROUP: dict(self.object_visibilities),
        }
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")