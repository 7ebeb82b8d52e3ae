import os
from typing import Optional, Tuple

from ..errors import DirectoryUnreadable
from .logging_setup import get_logger

log = get_logger("utils.file")

SUPPORTED_FORMATS = (".png", ".jpg", ".jpeg")


def is_supported_image(name: str) -> bool:
    # 확장자만 검사(내용 검증 없음). ".png" 같은 이름도 통과
    return (name or "").lower().endswith(SUPPORTED_FORMATS)


def scan_directory_util(dir_path: str) -> list[str]:
    """디렉터리 바로 아래의 이미지 파일 경로를 목록 순서 그대로 반환.

    정렬/중복 제거 없음. 하위 디렉터리는 이름이 이미지 확장자여도 제외.
    목록을 읽지 못하면 DirectoryUnreadable.
    """
    image_files: list[str] = []
    try:
        with os.scandir(dir_path) as it:
            for entry in it:
                try:
                    if entry.is_dir():
                        continue
                except OSError:
                    # 깨진 항목은 디렉터리가 아닌 것으로 간주
                    pass
                if is_supported_image(entry.name):
                    image_files.append(os.path.join(dir_path, entry.name))
    except OSError as e:
        log.error("scan_dir_os_error | dir=%s | err=%s", dir_path, e.strerror or str(e))
        raise DirectoryUnreadable(dir_path, e.strerror or str(e)) from e
    return image_files


def resolve_start_target(arg: Optional[str]) -> Tuple[str, Optional[str]]:
    """명령줄 인자를 (스캔할 디렉터리, 시작 파일) 으로 해석.

    인자가 없으면 현재 디렉터리. 지원 확장자의 파일이면 부모 디렉터리 + 해당 파일.
    그 외(없는 경로, 이미지가 아닌 파일 포함)는 디렉터리로 취급하고
    스캔 단계에서 DirectoryUnreadable로 실패하게 둔다.
    """
    if not arg:
        return ".", None
    path = os.path.expanduser(arg)
    if os.path.isfile(path) and is_supported_image(path):
        return (os.path.dirname(path) or "."), path
    return path, None
