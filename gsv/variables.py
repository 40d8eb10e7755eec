"""Display variables shared between views."""

import threading

LINE_TEXT = "line-text"
LINE_NUMBER = "line-number"
LINE_COUNT = "line-count"


class Variables:
    """Thread-safe name to value store."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._values: dict[str, str] = {}

    def set(self, name: str, value: str) -> None:
        with self._lock:
            self._values[name] = value

    def get(self, name: str) -> str | None:
        with self._lock:
            return self._values.get(name)

    def snapshot(self) -> dict[str, str]:
        with self._lock:
            return dict(self._values)
