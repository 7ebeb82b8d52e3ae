import os

from PyQt6.QtCore import QObject, Qt  # type: ignore[import]
from PyQt6.QtGui import QImage, QImageReader, QTransform  # type: ignore[import]

from ..errors import DecodeFailure
from ..utils.logging_setup import get_logger

log = get_logger("services.image")


class ImageService(QObject):
    """디코딩/회전/리사이즈. 디코딩 결과는 캐시하지 않는다."""

    def decode(self, path: str) -> QImage:
        reader = QImageReader(path)
        # EXIF Orientation 등 자동 변환 활성화
        reader.setAutoTransform(True)
        img = reader.read()
        if img.isNull():
            err = reader.errorString() or "unknown error"
            log.warning("decode_fail | file=%s | err=%s", os.path.basename(path), err)
            raise DecodeFailure(path, err)
        log.debug("decode_ok | file=%s | w=%d | h=%d", os.path.basename(path), img.width(), img.height())
        return img

    def rotated(self, img: QImage, rotation_degrees: int) -> QImage:
        rot = int(rotation_degrees) % 360
        if not rot:
            return img
        t = QTransform()
        t.rotate(rot)
        return img.transformed(t, Qt.TransformationMode.SmoothTransformation)

    def scaled(self, img: QImage, width: int, height: int, smooth: bool = True) -> QImage:
        if img.width() == width and img.height() == height:
            return img
        mode = Qt.TransformationMode.SmoothTransformation if smooth else Qt.TransformationMode.FastTransformation
        # 비율은 compute_fit에서 이미 유지됨
        return img.scaled(width, height, Qt.AspectRatioMode.IgnoreAspectRatio, mode)
