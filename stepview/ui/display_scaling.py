from __future__ import annotations

from PyQt6.QtGui import QGuiApplication  # type: ignore[import]

from ..errors import DisplayQueryFailure
from .state import TargetFrame


def query_target_frame(use_available: bool = False) -> TargetFrame:
    """주 모니터 크기를 매 렌더마다 새로 읽는다(해상도 변경 대응)."""
    screen = QGuiApplication.primaryScreen()
    if screen is None:
        raise DisplayQueryFailure("Unable to get primary monitor.")
    geo = screen.availableGeometry() if use_available else screen.geometry()
    w, h = int(geo.width()), int(geo.height())
    if w <= 0 or h <= 0:
        raise DisplayQueryFailure(f"Primary monitor reports invalid size {w}x{h}.")
    return TargetFrame(w, h)
