import os

APP_TITLE = "Image Viewer"


def update_window_title(viewer, file_path=None) -> None:
    if file_path:
        filename = os.path.basename(file_path)
        nav = viewer.navigator
        viewer.setWindowTitle(f"{filename} ({nav.cursor + 1}/{nav.catalog_length}) - {APP_TITLE}")
    else:
        viewer.setWindowTitle(APP_TITLE)
