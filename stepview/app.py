import argparse
import sys
from typing import Optional, Sequence

from .errors import DirectoryUnreadable, EmptyCatalog
from .services.catalog import Catalog
from .storage.settings_store import load_settings
from .utils.file_utils import resolve_start_target
from .utils.logging_setup import get_logger, setup_logging, shutdown_logging
from .utils.navigation import Navigator

EXIT_OK = 0
EXIT_DIRECTORY_UNREADABLE = 3
EXIT_EMPTY_CATALOG = 4

log = get_logger("app")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stepview",
        description="Borderless image viewer. J/K: next/previous, R: rotate, Q: quit.",
    )
    parser.add_argument("path", nargs="?", default=None,
                        help="directory to browse, or an image file to start from (default: current directory)")
    parser.add_argument("--log-level", default=None,
                        help="DEBUG, INFO, WARNING, ERROR (overrides STEPVIEW_LOG_LEVEL)")
    return parser


def prepare(path: Optional[str]) -> Navigator:
    """창 생성 전 단계: 카탈로그 스캔과 내비게이터 생성. 실패 시 예외 전파."""
    directory, start_file = resolve_start_target(path)
    catalog = Catalog.build(directory)
    return Navigator.for_start_file(catalog, start_file)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings().with_overrides(log_level=args.log_level)
    setup_logging(settings.log_level, settings.log_dir, json=settings.log_json)
    try:
        try:
            navigator = prepare(args.path)
        except DirectoryUnreadable as e:
            print(f"Error: Unable to open directory: {e.path}")
            return EXIT_DIRECTORY_UNREADABLE
        except EmptyCatalog:
            log.info("startup_empty_catalog | path=%s", args.path or ".")
            print("No images found in the specified directory.")
            return EXIT_EMPTY_CATALOG
        return _run_viewer(navigator, settings)
    finally:
        shutdown_logging()


def _run_viewer(navigator: Navigator, settings) -> int:
    from PyQt6.QtWidgets import QApplication  # type: ignore[import]
    from .ui.main_window import ViewerWindow

    app = QApplication.instance() or QApplication(sys.argv[:1])
    window = ViewerWindow(navigator, settings)
    window.show_current()
    window.show()
    window.activateWindow()
    log.info("event_loop_start | images=%d | cursor=%d", navigator.catalog_length, navigator.cursor)
    return int(app.exec())
