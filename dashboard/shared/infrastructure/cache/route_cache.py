import logging
from typing import Any

logger = logging.getLogger(__name__)


class RouteCache:
    """In-process cache of rendered page payloads, keyed by request path."""

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}

    def get(self, path: str) -> Any | None:
        return self._entries.get(path)

    def set(self, path: str, payload: Any) -> None:
        self._entries[path] = payload

    def revalidate_path(self, path: str) -> None:
        if self._entries.pop(path, None) is not None:
            logger.info("route_revalidated path=%s", path, extra={"action": "revalidate"})

    def __contains__(self, path: str) -> bool:
        return path in self._entries
