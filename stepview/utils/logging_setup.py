import os
import sys
import uuid
import logging
import logging.handlers
import queue
from typing import Optional

_SESSION_ID = uuid.uuid4().hex[:8]
_listener: logging.handlers.QueueListener | None = None
_queue_handler: logging.handlers.QueueHandler | None = None


class _SessionFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        if not hasattr(record, "session_id"):
            record.session_id = _SESSION_ID
        return True


def _default_log_dir() -> str:
    try:
        if sys.platform == "win32":
            base = os.getenv("LOCALAPPDATA") or os.path.expanduser("~\\AppData\\Local")
        else:
            base = os.getenv("XDG_STATE_HOME") or os.path.expanduser("~/.local/state")
        path = os.path.join(base, "stepview", "logs")
        os.makedirs(path, exist_ok=True)
        return path
    except OSError:
        return os.getcwd()


def _formatter(json: bool) -> logging.Formatter:
    if json:
        return logging.Formatter('{"ts":"%(asctime)s","level":"%(levelname)s","name":"%(name)s","sid":"%(session_id)s","msg":"%(message)s"}')
    return logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | sid=%(session_id)s | %(message)s")


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None, json: bool = False) -> None:
    """Initialize app-wide logging with rotating file handler and queue listener.

    루트 로거에 이미 핸들러가 있으면(테스트 러너, 임베딩 등) 레벨만 맞춘다.
    """
    global _listener, _queue_handler
    if logging.getLogger().handlers:
        set_level(level)
        return

    lvl = getattr(logging, str(level).upper(), logging.INFO)
    q: "queue.Queue[logging.LogRecord]" = queue.Queue(maxsize=10000)
    qh = logging.handlers.QueueHandler(q)
    qh.addFilter(_SessionFilter())

    root = logging.getLogger()
    root.setLevel(lvl)
    root.addHandler(qh)
    _queue_handler = qh

    fmt = _formatter(json)
    handlers: list[logging.Handler] = []

    log_dir = log_dir or _default_log_dir()
    try:
        os.makedirs(log_dir, exist_ok=True)
        fh = logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, "app.log"), maxBytes=5 * 1024 * 1024, backupCount=10, encoding="utf-8"
        )
        fh.setFormatter(fmt)
        handlers.append(fh)
    except OSError as e:
        # 파일 로그 불가 시 stderr만 사용
        sys.stderr.write(f"stepview: file logging disabled ({e})\n")

    sh = logging.StreamHandler(stream=sys.stderr)
    sh.setLevel(lvl)
    sh.setFormatter(fmt)
    handlers.append(sh)

    _listener = logging.handlers.QueueListener(q, *handlers, respect_handler_level=True)
    _listener.start()


def shutdown_logging() -> None:
    global _listener, _queue_handler
    if _listener:
        _listener.stop()
        _listener = None
    if _queue_handler:
        logging.getLogger().removeHandler(_queue_handler)
        _queue_handler = None


def set_level(level: str) -> None:
    lvl = getattr(logging, str(level).upper(), logging.INFO)
    logging.getLogger().setLevel(lvl)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"stepview.{name}")

