from __future__ import annotations

"""Optional image resources for the breathing scene, cached in memory."""

from pathlib import Path

from PyQt6.QtGui import QPixmap


ASSETS_DIR = Path(__file__).resolve().parents[2] / "assets"
_PIXMAP_CACHE: dict[str, QPixmap | None] = {}


def get_asset_path(relative: str) -> Path:
    return ASSETS_DIR / relative


def load_pixmap(relative: str) -> QPixmap | None:
    """Load a pixmap once; `None` when the file is missing or unreadable."""
    if relative in _PIXMAP_CACHE:
        return _PIXMAP_CACHE[relative]

    path = get_asset_path(relative)
    pixmap: QPixmap | None = None
    if path.exists():
        pixmap = QPixmap(str(path))
        if pixmap.isNull():
            pixmap = None
    _PIXMAP_CACHE[relative] = pixmap
    return pixmap
