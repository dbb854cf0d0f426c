from __future__ import annotations

from rostersync.models.bamboo import CompositeRecord
from rostersync.models.employee import Employee
from rostersync.services.hierarchy import build_hierarchy, count_nodes
from rostersync.services.reconciler import normalize_employees, resolve_managers
from tests.conftest import NOW


def _employee(employee_id: str, manager_id: str | None = None) -> Employee:
    return Employee(
        id=employee_id,
        name=f"Employee {employee_id}",
        display_name=f"Employee {employee_id}",
        manager_id=manager_id,
    )


def _dump(forest) -> list[dict]:
    return [node.model_dump(exclude_none=True) for node in forest]


def test_build_hierarchy_nests_reporting_chain():
    composites = [
        CompositeRecord(id="1", display_name="Alice"),
        CompositeRecord(id="2", display_name="Bob", supervisor="Alice"),
        CompositeRecord(id="3", display_name="Carol", supervisor="Bob"),
    ]
    employees = resolve_managers(normalize_employees(composites, NOW))

    assert _dump(build_hierarchy(employees)) == [
        {"id": "1", "employees": [{"id": "2", "employees": [{"id": "3"}]}]},
    ]


def test_build_hierarchy_unresolved_manager_becomes_root():
    composites = [
        CompositeRecord(id="1", display_name="Alice"),
        CompositeRecord(id="2", display_name="Bob", supervisor="Alicia"),
    ]
    employees = resolve_managers(normalize_employees(composites, NOW))

    assert _dump(build_hierarchy(employees)) == [{"id": "1"}, {"id": "2"}]
    assert employees[1].manager_id is None


def test_build_hierarchy_keeps_input_order():
    employees = [
        _employee("10", "1"),
        _employee("1"),
        _employee("30", "1"),
        _employee("2"),
        _employee("20", "1"),
        _employee("21", "2"),
    ]

    assert _dump(build_hierarchy(employees)) == [
        {"id": "1", "employees": [{"id": "10"}, {"id": "30"}, {"id": "20"}]},
        {"id": "2", "employees": [{"id": "21"}]},
    ]


def test_build_hierarchy_leaf_nodes_have_no_employees_key():
    [root] = build_hierarchy([_employee("1")])

    assert root.employees is None


def test_build_hierarchy_places_every_employee_once(sample_snapshot):
    forest = sample_snapshot.hierarchy

    assert _dump(forest) == [
        {"id": "1", "employees": [{"id": "2", "employees": [{"id": "3"}]}]},
        {"id": "4"},
    ]
    assert count_nodes(forest) == len(sample_snapshot.employees)


def test_build_hierarchy_omits_cycles():
    employees = [
        _employee("1"),
        _employee("2", "3"),
        _employee("3", "2"),
        _employee("4", "2"),
        _employee("5", "5"),
        _employee("6", "1"),
    ]

    forest = build_hierarchy(employees)

    assert _dump(forest) == [{"id": "1", "employees": [{"id": "6"}]}]
    assert count_nodes(forest) == 2


def test_build_hierarchy_omits_dangling_manager_ids():
    employees = [_employee("1"), _employee("2", "999"), _employee("3", "2")]

    assert _dump(build_hierarchy(employees)) == [{"id": "1"}]


def test_build_hierarchy_empty_roster():
    assert build_hierarchy([]) == []


def test_build_hierarchy_handles_deep_chains():
    depth = 5000
    employees = [_employee("0")] + [_employee(str(i), str(i - 1)) for i in range(1, depth)]

    forest = build_hierarchy(employees)

    assert len(forest) == 1
    assert count_nodes(forest) == depth


def test_count_nodes():
    employees = [_employee("1"), _employee("2", "1"), _employee("3", "1"), _employee("4")]

    assert count_nodes(build_hierarchy(employees)) == 4
