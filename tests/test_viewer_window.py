import os
import tempfile

import pytest
from PyQt6.QtCore import Qt

PIL = pytest.importorskip("PIL", reason="Pillow is required to write fixture images")
from PIL import Image  # type: ignore  # noqa: E402

from stepview.errors import DisplayQueryFailure  # noqa: E402
from stepview.services.catalog import Catalog  # noqa: E402
from stepview.storage.settings_store import ViewerSettings  # noqa: E402
from stepview.ui.state import TargetFrame  # noqa: E402
from stepview.utils.navigation import Navigator  # noqa: E402


def make_image(path: str, size) -> str:
    Image.new("RGB", size, (10, 120, 200)).save(path)
    return path


@pytest.fixture
def image_dir():
    with tempfile.TemporaryDirectory() as td:
        make_image(os.path.join(td, "wide.png"), (400, 200))
        make_image(os.path.join(td, "tall.jpg"), (200, 400))
        make_image(os.path.join(td, "small.jpeg"), (40, 30))
        yield td


def make_window(qtbot, directory, frame=TargetFrame(100, 100), settings=None, frame_provider=None):
    from stepview.ui.main_window import ViewerWindow

    nav = Navigator(Catalog.build(directory))
    w = ViewerWindow(nav, settings or ViewerSettings(), frame_provider=frame_provider or (lambda: frame))
    qtbot.addWidget(w)
    return w


def goto(window, name: str) -> None:
    nav = window.navigator
    for _ in range(nav.catalog_length):
        if os.path.basename(nav.current_path) == name:
            return
        nav.advance()
    raise AssertionError(f"{name} not in catalog")


def test_window_is_frameless(qtbot, image_dir):
    w = make_window(qtbot, image_dir)
    assert w.windowFlags() & Qt.WindowType.FramelessWindowHint


@pytest.mark.parametrize("name, expected", [
    ("wide.png", (100, 50)),
    ("tall.jpg", (50, 100)),
    ("small.jpeg", (40, 30)),
])
def test_show_current_fits_and_resizes(qtbot, image_dir, name, expected):
    w = make_window(qtbot, image_dir)
    goto(w, name)
    assert w.show_current()
    ri = w.last_instruction
    assert ri is not None
    assert ri.path == w.navigator.current_path
    assert ri.scaled_size == expected
    assert (w.width(), w.height()) == expected
    pix = w.image_label.pixmap()
    assert (pix.width(), pix.height()) == expected
    assert name in w.windowTitle()


def test_frame_is_queried_on_every_render(qtbot, image_dir):
    frames = [TargetFrame(100, 100), TargetFrame(200, 25)]
    calls = []

    def provider():
        calls.append(1)
        return frames[min(len(calls), len(frames)) - 1]

    w = make_window(qtbot, image_dir, frame_provider=provider)
    goto(w, "wide.png")
    w.show_current()
    assert w.last_instruction.scaled_size == (100, 50)
    w.show_current()
    # 400x200 -> 너비 200 이하로 맞춤(200x100) -> 높이 25로 재보정(50x25)
    assert w.last_instruction.scaled_size == (50, 25)
    assert len(calls) == 2


def test_key_navigation_wraps(qtbot, image_dir):
    w = make_window(qtbot, image_dir)
    w.show_current()
    seen = []
    for _ in range(3):
        qtbot.keyClick(w, Qt.Key.Key_J)
        seen.append(w.navigator.cursor)
    assert seen == [1, 2, 0]
    qtbot.keyClick(w, Qt.Key.Key_K)
    assert w.navigator.cursor == 2
    assert w.last_instruction.path == w.navigator.current_path


def test_keys_are_case_insensitive(qtbot, image_dir):
    w = make_window(qtbot, image_dir)
    qtbot.keyClick(w, Qt.Key.Key_J, Qt.KeyboardModifier.ShiftModifier)
    assert w.navigator.cursor == 1


def test_other_keys_are_ignored(qtbot, image_dir):
    w = make_window(qtbot, image_dir)
    w.show_current()
    before = w.last_instruction
    for key in (Qt.Key.Key_A, Qt.Key.Key_Space, Qt.Key.Key_Right):
        qtbot.keyClick(w, key)
    qtbot.keyClick(w, Qt.Key.Key_J, Qt.KeyboardModifier.ControlModifier)
    assert w.navigator.cursor == 0
    assert w.last_instruction is before


def test_custom_keymap(qtbot, image_dir):
    w = make_window(qtbot, image_dir, settings=ViewerSettings(keys={"next": ("Right",)}))
    qtbot.keyClick(w, Qt.Key.Key_Right)
    assert w.navigator.cursor == 1
    qtbot.keyClick(w, Qt.Key.Key_J)
    assert w.navigator.cursor == 1


def test_quit_key_closes_window(qtbot, image_dir):
    w = make_window(qtbot, image_dir)
    w.show()
    qtbot.waitExposed(w)
    qtbot.keyClick(w, Qt.Key.Key_Q)
    assert not w.isVisible()


def test_rotate_swaps_natural_size_and_resets_on_navigation(qtbot, image_dir):
    w = make_window(qtbot, image_dir)
    goto(w, "wide.png")
    w.show_current()
    qtbot.keyClick(w, Qt.Key.Key_R)
    ri = w.last_instruction
    assert ri.rotation_degrees == 90
    assert (ri.natural_width, ri.natural_height) == (200, 400)
    assert ri.scaled_size == (50, 100)
    w.show_next_image()
    assert w.rotation_degrees == 0
    assert w.last_instruction.rotation_degrees == 0


def test_decode_failure_keeps_previous_image_and_moves_cursor(qtbot):
    with tempfile.TemporaryDirectory() as td:
        make_image(os.path.join(td, "good.png"), (80, 60))
        with open(os.path.join(td, "broken.png"), "wb") as f:
            f.write(b"not really a png")
        w = make_window(qtbot, td)
        goto(w, "good.png")
        assert w.show_current()
        before = w.last_instruction
        good_idx = w.navigator.cursor

        w.show_next_image()  # 2장뿐이므로 다음은 broken.png
        assert w.navigator.cursor != good_idx
        assert os.path.basename(w.navigator.current_path) == "broken.png"
        assert w.last_instruction is before
        assert (w.width(), w.height()) == (80, 60)

        w.show_next_image()
        assert w.navigator.cursor == good_idx
        assert w.last_instruction.path == before.path


def test_display_query_failure_skips_render(qtbot, image_dir, capsys):
    def broken():
        raise DisplayQueryFailure("Unable to get primary monitor.")

    w = make_window(qtbot, image_dir, frame_provider=broken)
    assert w.show_current() is False
    assert w.last_instruction is None
    assert w.navigator.cursor == 0
    assert "Unable to get primary monitor." in capsys.readouterr().out


