from __future__ import annotations

from typing import TYPE_CHECKING
from PyQt6.QtCore import Qt  # type: ignore[import]

from ..shortcuts.shortcuts_manager import get_command

if TYPE_CHECKING:
    from .main_window import ViewerWindow

# Shift는 대소문자 구분 없이 허용, 나머지 수정자 조합은 무시
_BLOCKING_MODIFIERS = (
    Qt.KeyboardModifier.ControlModifier,
    Qt.KeyboardModifier.AltModifier,
    Qt.KeyboardModifier.MetaModifier,
)


def handle_key_press(viewer: "ViewerWindow", event) -> bool:
    mods = event.modifiers()
    for m in _BLOCKING_MODIFIERS:
        if mods & m:
            return False
    cmd_id = viewer.keymap.get(int(event.key()))
    if cmd_id is None:
        return False
    cmd = get_command(cmd_id)
    if cmd is None:
        return False
    viewer.log.debug("key_command | id=%s | cursor=%d", cmd.id, viewer.navigator.cursor)
    getattr(viewer, cmd.handler_name)()
    return True


def on_close(viewer: "ViewerWindow") -> None:
    viewer.log.info("window_close | cursor=%d", viewer.navigator.cursor)
