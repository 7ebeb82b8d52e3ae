from __future__ import annotations


class ViewerError(Exception):
    """stepview 공통 예외 기반 클래스."""


class DirectoryUnreadable(ViewerError):
    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        msg = f"unable to open directory: {path}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class EmptyCatalog(ViewerError):
    def __init__(self, directory: str = ""):
        self.directory = directory
        super().__init__("no images found" + (f" in {directory}" if directory else ""))


class InvalidDimensions(ViewerError, ValueError):
    pass


class DecodeFailure(ViewerError):
    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot decode {path}: {reason}" if reason else f"cannot decode {path}")


class DisplayQueryFailure(ViewerError):
    pass
