from __future__ import annotations
import copy
from typing import Any
import pytest
from mutual_aid.application.request_store import LOAD_ERROR_MESSAGE, RequestStore
from mutual_aid.domain.relief_request import RequestDraft, RequestStatus, RequestType
from mutual_aid.infrastructure.relief_api_client import ReliefAPIError
from mutual_aid.shared.errors import RequestLoadError, RequestMutationError


def _raw(id_: str, type_: str = "志工人力", status: str = "待處理", **extra: Any) -> dict[str, Any]:
    raw = {
        "id": id_,
        "type": type_,
        "status": status,
        "contactPerson": f"person-{id_}",
        "contactPhone": "0900",
        "address": f"address-{id_}",
        "description": f"description-{id_}",
        "createdAt": "2025-10-01T00:00:00Z",
    }
    raw.update(extra)
    return raw

class FakeReliefClient:
    def __init__(self) -> None:
        self.list_result: list[dict[str, Any]] = []
        self.next_created: dict[str, Any] | None = None
        self.next_updated: dict[str, Any] | None = None
        self.fail = False
        self.update_calls: list[tuple[str, RequestStatus]] = []

    def list_requests(self) -> list[dict[str, Any]]:
        if self.fail:
            raise ReliefAPIError("list failed")
        return self.list_result

    def create_request(self, draft: RequestDraft) -> dict[str, Any]:
        if self.fail:
            raise ReliefAPIError("create failed")
        assert self.next_created is not None
        return self.next_created

    def update_status(self, request_id: str, status: RequestStatus) -> dict[str, Any]:
        self.update_calls.append((request_id, status))
        if self.fail:
            raise ReliefAPIError("update failed")
        assert self.next_updated is not None
        return self.next_updated

def _draft() -> RequestDraft:
    return RequestDraft(
        type=RequestType.SUPPLY,
        contact_person="陳先生",
        contact_phone="0911",
        address="光復鄉",
        description="睡袋",
    )

def _loaded_store(*ids: str) -> tuple[RequestStore, FakeReliefClient]:
    client = FakeReliefClient()
    client.list_result = [_raw(i) for i in ids]
    store = RequestStore(client)
    store.load_all()
    return store, client

def test_load_all_replaces_collection_in_server_order() -> None:
    store, client = _loaded_store("old-1", "old-2")

    client.list_result = [_raw("c", contact_person="snake-c", contactPerson=None), _raw("a")]
    result = store.load_all()

    assert [r.id for r in store.requests] == ["c", "a"]
    assert store.requests[0].contact_person == "snake-c"
    assert [r.id for r in result] == ["c", "a"]
    assert store.load_error is None
    assert store.is_loading is False

def test_load_all_failure_keeps_collection_and_sets_error() -> None:
    store, client = _loaded_store("1", "2")
    before = copy.deepcopy(store.requests)

    client.fail = True
    with pytest.raises(RequestLoadError):
        store.load_all()

    assert store.requests == before
    assert store.load_error == LOAD_ERROR_MESSAGE
    assert store.is_loading is False

def test_load_all_success_after_failure_clears_error() -> None:
    store, client = _loaded_store("1")
    client.fail = True
    with pytest.raises(RequestLoadError):
        store.load_all()

    client.fail = False
    client.list_result = [_raw("2")]
    store.load_all()

    assert store.load_error is None
    assert [r.id for r in store.requests] == ["2"]

def test_create_prepends_normalized_record() -> None:
    store, client = _loaded_store("1", "2")
    existing = copy.deepcopy(store.requests)
    client.next_created = {
        "id": "3",
        "type": "物資需求",
        "status": "待處理",
        "contact_person": "陳先生",
        "contact_phone": "0911",
        "address": "光復鄉",
        "description": "睡袋",
        "created_at": "2025-10-02T01:00:00Z",
    }

    created = store.create(_draft())

    assert store.requests[0] is created
    assert created.contact_person == "陳先生"
    assert created.type is RequestType.SUPPLY
    assert store.requests[1:] == existing

def test_create_failure_leaves_collection_unchanged() -> None:
    store, client = _loaded_store("1", "2")
    before = copy.deepcopy(store.requests)

    client.fail = True
    with pytest.raises(RequestMutationError):
        store.create(_draft())

    assert store.requests == before

def test_update_status_replaces_whole_record_in_place() -> None:
    store, client = _loaded_store("1", "2", "3")
    client.next_updated = _raw("2", status="處理中", address="server-side address")

    updated = store.update_status("2", RequestStatus.IN_PROGRESS)

    assert [r.id for r in store.requests] == ["1", "2", "3"]
    assert store.requests[1] is updated
    assert updated.status is RequestStatus.IN_PROGRESS
    assert updated.address == "server-side address"
    assert store.requests[0].status is RequestStatus.NEW
    assert store.requests[2].status is RequestStatus.NEW
    assert client.update_calls == [("2", RequestStatus.IN_PROGRESS)]

def test_update_status_allows_backward_transition() -> None:
    store, client = _loaded_store("1")
    client.next_updated = _raw("1", status="已完成")
    store.update_status("1", RequestStatus.COMPLETED)

    client.next_updated = _raw("1", status="待處理")
    store.update_status("1", RequestStatus.NEW)

    assert store.requests[0].status is RequestStatus.NEW

def test_update_status_failure_changes_nothing() -> None:
    store, client = _loaded_store("1", "2")
    before = copy.deepcopy(store.requests)

    client.fail = True
    with pytest.raises(RequestMutationError):
        store.update_status("1", RequestStatus.COMPLETED)

    assert store.requests == before

def test_update_status_unknown_id_leaves_collection_unchanged() -> None:
    store, client = _loaded_store("1")
    before = copy.deepcopy(store.requests)
    client.next_updated = _raw("zzz", status="已完成")

    store.update_status("zzz", RequestStatus.COMPLETED)

    assert store.requests == before

def test_created_then_updated_scenario_keeps_prepend_order() -> None:
    client = FakeReliefClient()
    store = RequestStore(client)

    client.next_created = _raw("1", type_="志工人力")
    store.create(RequestDraft(RequestType.VOLUNTEER, "a", "b", "c", "d"))
    client.next_created = _raw("2", type_="物資需求")
    store.create(RequestDraft(RequestType.SUPPLY, "a", "b", "c", "d"))

    client.next_updated = _raw("1", type_="志工人力", status="已完成")
    store.update_status("1", RequestStatus.COMPLETED)

    assert [r.id for r in store.requests] == ["2", "1"]
    assert store.get("1").status is RequestStatus.COMPLETED                                          # type: ignore[union-attr]
    assert store.get("2").status is RequestStatus.NEW                                                # type: ignore[union-attr]
    assert store.get("missing") is None

def test_create_replaces_record_already_loaded_with_same_id() -> None:
    store, client = _loaded_store("1", "9", "2")
    client.next_created = _raw("9", type_="物資需求", description="from create response")

    created = store.create(_draft())

    assert [r.id for r in store.requests] == ["9", "1", "2"]
    assert store.requests[0] is created
    assert store.get("9").description == "from create response"                                     # type: ignore[union-attr]

def test_numeric_server_id_matches_string_id_on_update() -> None:
    client = FakeReliefClient()
    client.list_result = [{"id": 5, "type": "志工人力", "status": "待處理"}]
    store = RequestStore(client)
    store.load_all()
    client.next_updated = {"id": 5, "type": "志工人力", "status": "已完成"}

    store.update_status("5", RequestStatus.COMPLETED)

    assert [r.id for r in store.requests] == ["5"]
    assert store.requests[0].status is RequestStatus.COMPLETED
