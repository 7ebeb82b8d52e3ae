import os
from dataclasses import dataclass, field, replace
from typing import Dict, Mapping, Optional, Tuple

from ..utils.logging_setup import get_logger

log = get_logger("storage.settings")

ENV_PREFIX = "STEPVIEW_"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_FRAME_SOURCES = ("screen", "available")
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass(frozen=True)
class ViewerSettings:
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    log_json: bool = False
    smooth_scaling: bool = True
    frame_source: str = "screen"  # screen | available
    # 명령 ID -> 키 이름 목록 (기본값 덮어쓰기)
    keys: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    @property
    def use_available_geometry(self) -> bool:
        return self.frame_source == "available"

    def with_overrides(self, log_level: Optional[str] = None) -> "ViewerSettings":
        if log_level:
            lvl = _parse_level(log_level)
            if lvl:
                return replace(self, log_level=lvl)
        return self


def _parse_level(raw: str) -> Optional[str]:
    lvl = str(raw).strip().upper()
    if lvl in _LOG_LEVELS:
        return lvl
    log.warning("settings_invalid_log_level | value=%s", raw)
    return None


def _parse_bool(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    log.warning("settings_invalid_bool | key=%s | value=%s", name, raw)
    return default


def _parse_keys(env: Mapping[str, str]) -> Dict[str, Tuple[str, ...]]:
    prefix = ENV_PREFIX + "KEY_"
    keys: Dict[str, Tuple[str, ...]] = {}
    for name, raw in env.items():
        if not name.startswith(prefix):
            continue
        cmd_id = name[len(prefix):].lower()
        seqs = tuple(s.strip() for s in (raw or "").split(",") if s.strip())
        if cmd_id and seqs:
            keys[cmd_id] = seqs
    return keys


def load_settings(env: Optional[Mapping[str, str]] = None) -> ViewerSettings:
    """환경 변수(STEPVIEW_*)에서 설정을 읽는다. 잘못된 값은 기본값으로."""
    env = os.environ if env is None else env
    defaults = ViewerSettings()

    level = defaults.log_level
    raw_level = env.get(ENV_PREFIX + "LOG_LEVEL")
    if raw_level:
        level = _parse_level(raw_level) or defaults.log_level

    frame_source = defaults.frame_source
    raw_frame = env.get(ENV_PREFIX + "FRAME")
    if raw_frame:
        v = raw_frame.strip().lower()
        if v in _FRAME_SOURCES:
            frame_source = v
        else:
            log.warning("settings_invalid_frame | value=%s", raw_frame)

    return ViewerSettings(
        log_level=level,
        log_dir=env.get(ENV_PREFIX + "LOG_DIR") or None,
        log_json=_parse_bool("LOG_JSON", env.get(ENV_PREFIX + "LOG_JSON"), defaults.log_json),
        smooth_scaling=_parse_bool("SMOOTH_SCALING", env.get(ENV_PREFIX + "SMOOTH_SCALING"), defaults.smooth_scaling),
        frame_source=frame_source,
        keys=_parse_keys(env),
    )
