from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

from PyQt6.QtGui import QKeySequence  # type: ignore[import]

from ..utils.logging_setup import get_logger

log = get_logger("shortcuts")


@dataclass(frozen=True)
class Command:
    id: str
    label: str
    handler_name: str
    default_keys: List[str]


# 명령 레지스트리: 여기에 없는 키는 모두 무시
COMMANDS: List[Command] = [
    Command("quit", "Quit", "quit_viewer", ["Q"]),
    Command("next", "Next image", "show_next_image", ["J"]),
    Command("prev", "Previous image", "show_prev_image", ["K"]),
    Command("rotate", "Rotate 90° clockwise", "rotate_current", ["R"]),
]


def get_command(cmd_id: str) -> Optional[Command]:
    for cmd in COMMANDS:
        if cmd.id == cmd_id:
            return cmd
    return None


def key_from_string(text: str) -> Optional[int]:
    """'j', 'J', 'Right' 같은 키 이름을 Qt 키 코드로. 수정자 조합은 허용하지 않음."""
    s = (text or "").strip()
    if not s:
        return None
    if len(s) == 1:
        # 대소문자 구분 없음
        s = s.upper()
    seq = QKeySequence(s)
    if seq.count() != 1:
        return None
    combo = seq[0]
    if combo.keyboardModifiers().value != 0:
        return None
    key = int(combo.key().value)
    return key or None


def build_keymap(custom: Optional[Mapping[str, Sequence[str]]] = None) -> Dict[int, str]:
    """Qt 키 코드 -> 명령 ID. 사용자 지정 키는 해당 명령의 기본 키를 대체한다."""
    custom = custom or {}
    for cmd_id in custom:
        if get_command(cmd_id) is None:
            log.warning("keymap_unknown_command | id=%s", cmd_id)
    keymap: Dict[int, str] = {}
    for cmd in COMMANDS:
        seqs = list(custom.get(cmd.id) or cmd.default_keys)
        for s in seqs:
            key = key_from_string(s)
            if key is None:
                log.warning("keymap_invalid_key | id=%s | key=%s", cmd.id, s)
                continue
            if key in keymap and keymap[key] != cmd.id:
                log.warning("keymap_conflict | key=%s | kept=%s | dropped=%s", s, keymap[key], cmd.id)
                continue
            keymap[key] = cmd.id
    return keymap
