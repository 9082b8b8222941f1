from app.sessions import KitchenStore
from domain.services import Kitchen, SousChef
from tests.conftest import FakeGateway, RecordingResolver


def store(max_sessions: int) -> KitchenStore:
    sous_chef = SousChef(FakeGateway(), RecordingResolver())  # pyright: ignore[reportArgumentType]
    return KitchenStore(lambda: Kitchen(sous_chef), max_sessions=max_sessions)


def test_same_session_same_kitchen() -> None:
    kitchens = store(2)
    session_id, kitchen = kitchens.get(None)
    assert kitchens.get(session_id) == (session_id, kitchen)
    assert len(kitchens) == 1


def test_unknown_session_gets_new_kitchen() -> None:
    kitchens = store(2)
    session_id, _ = kitchens.get("stale-cookie")
    assert session_id != "stale-cookie"
    assert session_id in kitchens


def test_least_recently_used_is_evicted() -> None:
    kitchens = store(2)
    first, _ = kitchens.get(None)
    second, _ = kitchens.get(None)
    kitchens.get(first)
    third, _ = kitchens.get(None)

    assert len(kitchens) == 2
    assert first in kitchens
    assert third in kitchens
    assert second not in kitchens
