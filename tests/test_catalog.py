import threading

from catalog import DEFAULT_BOARDS, fetch_boards_async, list_boards, save_layout
from config import CFG
from session import Session


def test_list_boards_returns_reference_boards(monkeypatch):
    monkeypatch.setattr(CFG, "CATALOG_DELAY_SEC", 0.0)
    boards = list_boards()
    assert [(b.id, b.width, b.height) for b in boards] == [
        ("plate-a", 2750, 1840),
        ("plate-b", 2000, 1000),
    ]
    boards.append(None)
    assert len(DEFAULT_BOARDS) == 2


def test_fetch_boards_async_feeds_session():
    session = Session()
    done = threading.Event()

    def _loaded(boards):
        session.load_catalog(boards)
        done.set()

    th = fetch_boards_async(_loaded, delay=0.0)
    assert done.wait(5.0)
    th.join(5.0)
    assert session.active_board_id == "plate-a"


def test_save_layout_is_noop():
    assert save_layout(delay=0.0, board=None, placed=[]) == {"ok": True}
