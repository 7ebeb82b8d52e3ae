from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterator

from ..utils.file_utils import scan_directory_util
from ..utils.logging_setup import get_logger

log = get_logger("services.catalog")


@dataclass(frozen=True)
class Catalog:
    """한 디렉터리에서 시작 시 한 번 수집한, 변경되지 않는 이미지 경로 목록."""

    directory: str
    paths: tuple[str, ...]

    @classmethod
    def build(cls, directory: str) -> "Catalog":
        log.info("scan_dir_start | dir=%s", directory)
        paths = tuple(scan_directory_util(directory))
        log.info("scan_dir_done | dir=%s | count=%d", directory, len(paths))
        return cls(directory=directory, paths=paths)

    def __len__(self) -> int:
        return len(self.paths)

    def __getitem__(self, index: int) -> str:
        return self.paths[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths)

    def index_of(self, path: str | None) -> int:
        if not path:
            return -1
        target = os.path.normcase(os.path.abspath(path))
        for i, p in enumerate(self.paths):
            if os.path.normcase(os.path.abspath(p)) == target:
                return i
        return -1
