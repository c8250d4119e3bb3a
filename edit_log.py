import os
import threading
from datetime import datetime
from pathlib import Path

EDIT_LOG_ENV_VAR = "TR33DR4W_EDIT_LOG"
_DEFAULT_EDIT_LOG_PATH = Path("edit.log")
_edit_log_lock = threading.Lock()


def edit_log_path() -> Path:
    configured = os.getenv(EDIT_LOG_ENV_VAR)
    return Path(configured).expanduser() if configured else _DEFAULT_EDIT_LOG_PATH


def reset_edit_log() -> None:
    with _edit_log_lock:
        edit_log_path().write_text("", encoding="utf-8")


def log_edit_event(action: str, applied: bool, detail: str | None = None) -> None:
    """Append one tab-separated line: timestamp, OK/REFUSED, action, detail."""
    timestamp = datetime.now().isoformat(timespec="seconds")
    status = "ok" if applied else "refused"
    line = f"{timestamp}\t{status.upper()}\t{action}"
    message = detail.strip() if detail else ""
    if message:
        # Keep one event per line even when a label carries odd whitespace.
        line = f"{line}\t{' '.join(message.split())}"
    with _edit_log_lock:
        with edit_log_path().open("a", encoding="utf-8") as log:
            log.write(line + "\n")


def read_edit_log() -> list[str]:
    path = edit_log_path()
    if not path.exists():
        return []
    with _edit_log_lock:
        return path.read_text(encoding="utf-8").splitlines()
