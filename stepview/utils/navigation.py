from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import EmptyCatalog, InvalidDimensions
from ..ui.state import RenderInstruction, TargetFrame
from .logging_setup import get_logger

if TYPE_CHECKING:
    from ..services.catalog import Catalog

log = get_logger("utils.navigation")


def _check_dimension(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidDimensions(f"{name} must be a positive integer, got {value!r}")
    return value


def compute_fit(natural_width: int, natural_height: int, frame_width: int, frame_height: int) -> tuple[int, int]:
    """Fit an image into the frame, width first, then height.

    The height check runs against the already width-adjusted height, so an
    image too large on both axes may be corrected twice. Never upscales.
    Truncation follows int() of the float product; an axis that truncates
    to 0 is kept at 1.
    """
    width = _check_dimension("natural_width", natural_width)
    height = _check_dimension("natural_height", natural_height)
    frame_width = _check_dimension("frame_width", frame_width)
    frame_height = _check_dimension("frame_height", frame_height)

    if width > frame_width:
        ratio = frame_width / width
        width = frame_width
        height = max(1, int(height * ratio))

    if height > frame_height:
        ratio = frame_height / height
        height = frame_height
        width = max(1, int(width * ratio))

    return width, height


class Navigator:
    """카탈로그 위의 순환 커서와 화면 맞춤 계산을 소유."""

    compute_fit = staticmethod(compute_fit)

    def __init__(self, catalog: "Catalog", start_index: int = 0):
        length = len(catalog)
        if length <= 0:
            raise EmptyCatalog(getattr(catalog, "directory", ""))
        self._catalog = catalog
        self._length = length
        self._cursor = int(start_index) % length

    @classmethod
    def for_start_file(cls, catalog: "Catalog", path: str | None) -> "Navigator":
        idx = catalog.index_of(path) if path else -1
        if path and idx < 0:
            log.warning("start_file_not_in_catalog | file=%s", path)
        return cls(catalog, start_index=max(0, idx))

    @property
    def catalog(self) -> "Catalog":
        return self._catalog

    @property
    def catalog_length(self) -> int:
        return self._length

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current_path(self) -> str:
        return self._catalog[self._cursor]

    def advance(self) -> int:
        self._cursor = (self._cursor + 1) % self._length
        return self._cursor

    def retreat(self) -> int:
        self._cursor = (self._cursor - 1 + self._length) % self._length
        return self._cursor

    def render_instruction(self, natural_width: int, natural_height: int, frame: TargetFrame, rotation_degrees: int = 0) -> RenderInstruction:
        w, h = compute_fit(natural_width, natural_height, frame.width, frame.height)
        return RenderInstruction(
            path=self.current_path,
            natural_width=natural_width,
            natural_height=natural_height,
            scaled_width=w,
            scaled_height=h,
            rotation_degrees=rotation_degrees,
        )
