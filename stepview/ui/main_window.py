import os
from typing import Callable, Optional

from PyQt6.QtCore import Qt  # type: ignore[import]
from PyQt6.QtGui import QPixmap  # type: ignore[import]
from PyQt6.QtWidgets import QLabel, QWidget  # type: ignore[import]

from ..errors import DecodeFailure, DisplayQueryFailure
from ..services.image_service import ImageService
from ..shortcuts.shortcuts_manager import build_keymap
from ..storage.settings_store import ViewerSettings
from ..utils.logging_setup import get_logger
from ..utils.navigation import Navigator
from . import event_handlers
from .display_scaling import query_target_frame
from .state import RenderInstruction, TargetFrame, TransformState
from .title_status import update_window_title


class ViewerWindow(QWidget):
    def __init__(self,
                 navigator: Navigator,
                 settings: Optional[ViewerSettings] = None,
                 image_service: Optional[ImageService] = None,
                 frame_provider: Optional[Callable[[], TargetFrame]] = None):
        # 테두리/제목 표시줄 없는 창
        super().__init__(None, Qt.WindowType.FramelessWindowHint)
        self.log = get_logger("ui.ViewerWindow")
        self.navigator = navigator
        self.settings = settings or ViewerSettings()
        self.image_service = image_service or ImageService(self)
        if frame_provider is None:
            use_available = self.settings.use_available_geometry
            frame_provider = lambda: query_target_frame(use_available)  # noqa: E731
        self._frame_provider = frame_provider
        self.keymap = build_keymap(self.settings.keys)
        self._transform = TransformState()
        self.last_instruction: Optional[RenderInstruction] = None

        self.image_label = QLabel(self)
        self.image_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.image_label.setGeometry(0, 0, 1, 1)
        self.setStyleSheet("background-color: black;")
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        update_window_title(self)

    @property
    def rotation_degrees(self) -> int:
        return self._transform.rotation_degrees

    def show_current(self) -> bool:
        """현재 커서의 이미지를 맞춤 크기로 표시. 실패 시 이전 화면 유지."""
        path = self.navigator.current_path
        try:
            img = self.image_service.decode(path)
        except DecodeFailure as e:
            # 조용히 무시: 커서는 이미 이동된 상태 유지
            self.log.info("render_skip_decode | file=%s | err=%s", os.path.basename(path), e.reason)
            return False
        img = self.image_service.rotated(img, self._transform.rotation_degrees)
        try:
            frame = self._frame_provider()
        except DisplayQueryFailure as e:
            print(f"Error: {e}")
            self.log.error("render_skip_display | file=%s | err=%s", os.path.basename(path), e)
            return False
        instruction = self.navigator.render_instruction(
            img.width(), img.height(), frame, rotation_degrees=self._transform.rotation_degrees
        )
        self._apply_instruction(instruction, img)
        return True

    def _apply_instruction(self, instruction: RenderInstruction, img) -> None:
        w, h = instruction.scaled_size
        scaled = self.image_service.scaled(img, w, h, smooth=self.settings.smooth_scaling)
        self.image_label.setPixmap(QPixmap.fromImage(scaled))
        self.image_label.setGeometry(0, 0, w, h)
        self.resize(w, h)
        self.last_instruction = instruction
        update_window_title(self, instruction.path)
        self.log.info(
            "render | file=%s | idx=%d | natural=%dx%d | scaled=%dx%d | rot=%d",
            os.path.basename(instruction.path), self.navigator.cursor,
            instruction.natural_width, instruction.natural_height, w, h, instruction.rotation_degrees,
        )

    def show_next_image(self) -> None:
        self.navigator.advance()
        self._transform = TransformState()
        self.show_current()

    def show_prev_image(self) -> None:
        self.navigator.retreat()
        self._transform = TransformState()
        self.show_current()

    def rotate_current(self) -> None:
        self._transform = self._transform.rotated_cw()
        self.show_current()

    def quit_viewer(self) -> None:
        self.close()

    def keyPressEvent(self, event):
        if event_handlers.handle_key_press(self, event):
            event.accept()
            return
        super().keyPressEvent(event)

    def closeEvent(self, event):
        event_handlers.on_close(self)
        super().closeEvent(event)
