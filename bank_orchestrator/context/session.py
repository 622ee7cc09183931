"""
Session collaborators.

The orchestrator only needs three narrow capabilities from its host:
a place to read/clear the bearer credential, a way to send the user
somewhere else, and something that renders results. Hosts can pass any
object with the same methods; simple in-process implementations live here.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional, Protocol

from bank_orchestrator.logging_config import get_logger

logger = get_logger("bank_orchestrator.session")


class TokenProvider(Protocol):
    def get(self) -> Optional[str]: ...

    def clear(self) -> None: ...


class Navigator(Protocol):
    def go_to(self, path: str) -> None: ...


class Renderer(Protocol):
    def show(self, data: Any) -> None: ...


class MemoryTokenProvider:
    """
    Keeps the credential in process memory.
    """

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: Optional[str]) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenProvider:
    """
    Persists the credential as {"token": "..."} in a JSON file, the way a
    browser client keeps it in local storage between page loads.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def get(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Unreadable token file %s: %s", self.path, e)
            return None
        token = data.get("token") if isinstance(data, dict) else None
        return token or None

    def set(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"token": token}), encoding="utf-8")

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass


class RecordingNavigator:
    """
    Records every redirect; useful for CLIs and tests where there is no page to leave.
    """

    def __init__(self):
        self.history: List[str] = []

    @property
    def current(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    def go_to(self, path: str) -> None:
        logger.info("Navigating to %s", path)
        self.history.append(path)
