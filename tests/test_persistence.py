from pathlib import Path
from types import SimpleNamespace

import pytest

from src.courier.errors import DependencyUnavailable, InvalidStatusTransition, OrderNotFound
from src.courier.models.domain import BatchAssignmentResult, BatchItemResult, Coordinate
from src.courier.persistence import database
from src.courier.persistence.filesystem import FileStorage
from src.courier.services.outputs.assignment_formatter import batch_result_to_csv, batch_result_to_json


class FakeQuery:
    def __init__(self, client, table, rows):
        self.client = client
        self.table_name = table
        self.rows = rows
        self.filters: dict[str, str] = {}

    def select(self, *args, **kwargs):
        return self

    def eq(self, column, value):
        self.filters[column] = value
        return self

    def limit(self, count):
        return self

    def update(self, values):
        self.client.updates.append((self.table_name, values))
        return self

    def insert(self, values):
        self.client.inserts.append((self.table_name, values))
        return self

    def execute(self):
        rows = [row for row in self.rows if all(row.get(k) == v for k, v in self.filters.items())]
        return SimpleNamespace(data=rows)


class FakeSupabase:
    def __init__(self, tables=None, rpc_results=None, fail=False):
        self.tables = tables or {}
        self.rpc_results = rpc_results or {}
        self.fail = fail
        self.rpc_calls: list[tuple[str, dict]] = []
        self.updates: list[tuple[str, dict]] = []
        self.inserts: list[tuple[str, dict]] = []

    def table(self, name):
        if self.fail:
            raise ConnectionError("supabase unreachable")
        return FakeQuery(self, name, self.tables.get(name, []))

    def rpc(self, name, params):
        if self.fail:
            raise ConnectionError("supabase unreachable")
        self.rpc_calls.append((name, params))
        return SimpleNamespace(execute=lambda: SimpleNamespace(data=self.rpc_results.get(name, [])))


ORDER_ROW = {
    "id": "O1",
    "status": "pending",
    "pickup_coordinates": {"type": "Point", "coordinates": [39.2, 21.5]},
    "delivery_coordinates": [39.3, 21.6],
    "items": [
        {"weight": 2.0, "quantity": 3, "is_fragile": False},
        {"weight": 1.5, "quantity": 2, "is_fragile": True},
    ],
    "service_type": "express",
    "priority": "high",
}

DRIVER_ROW = {
    "id": "D1",
    "first_name": "Sara",
    "last_name": "Ali",
    "current_location": [39.21, 21.51],
    "rating": 4.8,
    "active_deliveries": ["O7", "O8"],
    "max_deliveries": 5,
    "vehicle_type": "car",
    "vehicle_weight_capacity": 150,
    "total_deliveries": 40,
    "successful_deliveries": 38,
}

HUB_ROW = {
    "id": "H1",
    "name": "North Hub",
    "coordinates": {"longitude": 39.25, "latitude": 21.55},
    "max_orders": 200,
    "current_load": 150,
    "service_radius_km": 25,
}


@pytest.fixture
def fake_client(monkeypatch):
    client = FakeSupabase(
        tables={"orders": [dict(ORDER_ROW)]},
        rpc_results={"drivers_within_radius": [DRIVER_ROW], "hubs_with_capacity": [HUB_ROW]},
    )
    monkeypatch.setattr(database, "get_supabase_client", lambda: client)
    return client


def test_file_storage_creates_run_directory(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="batch_test")

    assert run_dir.exists()
    assert run_dir.is_dir()
    assert run_dir.parent == (tmp_path / "outputs").resolve()
    assert run_dir.name.startswith("batch_test_")


def test_file_storage_writes_json_and_csv(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory()

    summary_path = run_dir / "summary.json"
    assignments_path = run_dir / "assignments.csv"

    storage.write_json(summary_path, {"hello": "world"})
    storage.write_csv(assignments_path, "a,b\n1,2\n")

    assert summary_path.read_text(encoding="utf-8") == '{\n  "hello": "world"\n}'
    assert assignments_path.read_text(encoding="utf-8") == "a,b\n1,2\n"


def test_batch_result_serializers():
    result = BatchAssignmentResult(
        items=[
            BatchItemResult(order_id="O1", assigned=True, driver_id="D1", driver_name="Sara Ali", score=91, distance_km=1.23456),
            BatchItemResult(order_id="O2", assigned=False, reason="No available drivers found in the area"),
        ]
    )

    summary = batch_result_to_json(result)
    csv_text = batch_result_to_csv(result)

    assert summary["summary"] == {"total": 2, "assigned": 1, "unassigned": 1}
    assert summary["successful"][0]["driver_id"] == "D1"
    assert summary["failed"] == [{"order_id": "O2", "reason": "No available drivers found in the area"}]
    lines = csv_text.splitlines()
    assert lines[0] == "order_id,assigned,driver_id,driver_name,score,distance_km,reason"
    assert lines[1] == "O1,True,D1,Sara Ali,91,1.23,"
    assert lines[2].startswith("O2,False,")


def test_get_order_request_maps_row(fake_client):
    order = database.get_order_request("O1")

    assert order.order_id == "O1"
    assert order.pickup == Coordinate(39.2, 21.5)
    assert order.delivery == Coordinate(39.3, 21.6)
    assert order.total_weight == pytest.approx(9.0)
    assert order.has_fragile_items
    assert order.service_type == "express"
    assert order.priority == "high"


def test_get_order_request_missing(fake_client):
    assert database.get_order_request("nope") is None


def test_find_available_drivers(fake_client):
    drivers = database.find_available_drivers(Coordinate(39.2, 21.5), 20_000)

    assert fake_client.rpc_calls == [("drivers_within_radius", {"lng": 39.2, "lat": 21.5, "radius_m": 20_000})]
    driver = drivers[0]
    assert driver.driver_id == "D1"
    assert driver.name == "Sara Ali"
    assert driver.active_deliveries == 2
    assert driver.success_rate == pytest.approx(95.0)
    assert driver.vehicle.type == "car"


def test_driver_without_history_has_no_success_rate():
    row = dict(DRIVER_ROW, total_deliveries=0, successful_deliveries=0, active_deliveries=1)

    driver = database.row_to_driver(row)

    assert driver.success_rate is None
    assert driver.active_deliveries == 1


def test_invalid_driver_rows_are_skipped(monkeypatch):
    client = FakeSupabase(rpc_results={"drivers_within_radius": [{"id": "broken"}, DRIVER_ROW]})
    monkeypatch.setattr(database, "get_supabase_client", lambda: client)

    drivers = database.find_available_drivers(Coordinate(39.2, 21.5), 1000)

    assert [driver.driver_id for driver in drivers] == ["D1"]


def test_find_available_hubs(fake_client):
    hubs = database.find_available_hubs(Coordinate(39.25, 21.55), required_capacity=1, limit=3)

    name, params = fake_client.rpc_calls[0]
    assert name == "hubs_with_capacity"
    assert params["required_capacity"] == 1
    assert params["max_results"] == 3
    assert hubs[0].hub_id == "H1"
    assert hubs[0].available_capacity == 50
    assert hubs[0].utilization == pytest.approx(75.0)
    assert hubs[0].service_radius_km == 25.0


def test_unconfigured_database_is_dependency_unavailable(monkeypatch):
    monkeypatch.setattr(database, "get_supabase_client", lambda: None)

    with pytest.raises(DependencyUnavailable):
        database.get_order_request("O1")
    with pytest.raises(DependencyUnavailable):
        database.find_available_drivers(Coordinate(0, 0), 1000)


def test_query_failure_is_dependency_unavailable(monkeypatch):
    monkeypatch.setattr(database, "get_supabase_client", lambda: FakeSupabase(fail=True))

    with pytest.raises(DependencyUnavailable) as excinfo:
        database.find_available_hubs(Coordinate(0, 0))

    assert excinfo.value.dependency == "hub pool"


def test_update_order_status_records_history(fake_client):
    updated = database.update_order_status("O1", "confirmed", notes="merchant confirmed")

    assert updated["previous_status"] == "pending"
    assert updated["status"] == "confirmed"
    assert fake_client.updates[0][0] == "orders"
    assert fake_client.updates[0][1]["status"] == "confirmed"
    table, row = fake_client.inserts[0]
    assert table == "order_status_history"
    assert row["notes"] == "merchant confirmed"


def test_update_order_status_rejects_invalid_transition(fake_client):
    with pytest.raises(InvalidStatusTransition):
        database.update_order_status("O1", "delivered")
    assert fake_client.updates == []


def test_update_order_status_unknown_order(fake_client):
    with pytest.raises(OrderNotFound):
        database.update_order_status("missing", "confirmed")


def test_order_item_quantity_defaults_only_when_missing():
    row = dict(
        ORDER_ROW,
        items=[
            {"weight": 4.0, "quantity": 0},
            {"weight": 2.5},
            {"weight": 1.0, "quantity": None},
        ],
    )

    order = database.row_to_order_request(row)

    assert order.total_weight == pytest.approx(3.5)
