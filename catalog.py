# catalog.py — stand-in board catalog backend
from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, List, Optional

from activity import emit
from config import CFG
from models import Board

DEFAULT_BOARDS: List[Board] = [
    Board(id="plate-a", name="Chapa A", width=2750, height=1840),
    Board(id="plate-b", name="Chapa B", width=2000, height=1000),
]


def _delay(seconds: Optional[float]) -> None:
    seconds = CFG.CATALOG_DELAY_SEC if seconds is None else seconds
    if seconds > 0:
        time.sleep(seconds)


def list_boards(delay: Optional[float] = None) -> List[Board]:
    _delay(delay)
    return list(DEFAULT_BOARDS)


def fetch_boards_async(
    callback: Callable[[List[Board]], Any],
    delay: Optional[float] = None,
) -> threading.Thread:
    """Fetch the catalog on a daemon thread and hand the boards to ``callback``."""

    def _run():
        try:
            boards = list_boards(delay)
        except Exception as e:
            emit("Catalog fetch failed", error=f"{type(e).__name__}: {e}")
            return
        callback(boards)

    th = threading.Thread(target=_run, daemon=True)
    th.start()
    return th


def save_layout(delay: Optional[float] = None, **_layout: Any) -> Dict[str, Any]:
    # No backend yet: the layout lives only in the running session.
    _delay(delay)
    return {"ok": True}


__all__ = ["DEFAULT_BOARDS", "list_boards", "fetch_boards_async", "save_layout"]
