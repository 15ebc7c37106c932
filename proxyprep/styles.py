"""Discovery and loading of application style sheets."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

BUILT_IN_STYLES: tuple[str, ...] = ("Default", "Fusion")
STYLE_SUFFIX = "qss"


def _base_name(path: Path) -> str:
    return path.name.split(".", 1)[0]


def _suffix(path: Path) -> str:
    name = path.name
    return name.rsplit(".", 1)[1] if "." in name else ""


def list_styles(style_dirs: Iterable[str | Path]) -> list[str]:
    """Built-in styles followed by the ``.qss`` files found in ``style_dirs``."""
    styles = list(BUILT_IN_STYLES)
    for style_dir in map(Path, style_dirs):
        if not style_dir.is_dir():
            continue
        for entry in sorted(style_dir.iterdir()):
            if not entry.is_file() or _suffix(entry).lower() != STYLE_SUFFIX:
                continue
            name = _base_name(entry)
            if name not in styles:
                styles.append(name)
    return styles


def load_stylesheet(style: str, style_dirs: Iterable[str | Path]) -> str | None:
    """Return the style sheet text for ``style``.

    Built-in styles use no style sheet and give an empty string. Other styles
    are read from the first of ``style_dirs`` holding ``<style>.qss``; ``None``
    is returned when no such file exists.
    """
    if style in BUILT_IN_STYLES:
        return ""
    for style_dir in map(Path, style_dirs):
        path = style_dir / f"{style}.{STYLE_SUFFIX}"
        if path.is_file():
            return path.read_bytes().decode("latin-1")
    return None