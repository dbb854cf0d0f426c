"""Builds the management forest from a flat, manager-linked roster."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Sequence

from rostersync.models.employee import Employee
from rostersync.models.hierarchy import HierarchyNode

logger = logging.getLogger(__name__)


def build_hierarchy(employees: Sequence[Employee]) -> list[HierarchyNode]:
    """Group employees under their managers.

    Roots are employees without a manager id. Children keep the relative order
    of ``employees``. Every id is placed at most once; employees whose manager
    chain never reaches a root (dangling ids, cycles) are left out.
    """
    roots: list[int] = []
    children: dict[str, list[int]] = defaultdict(list)
    for index, employee in enumerate(employees):
        if employee.manager_id is None:
            roots.append(index)
        else:
            children[employee.manager_id].append(index)

    # Depth-first, pre-order. Parents always precede their children in `order`.
    placed: set[str] = set()
    order: list[int] = []
    stack = list(reversed(roots))
    while stack:
        index = stack.pop()
        employee_id = employees[index].id
        if employee_id in placed:
            continue
        placed.add(employee_id)
        order.append(index)
        stack.extend(reversed(children.get(employee_id, [])))

    nodes: dict[int, HierarchyNode] = {}
    for index in reversed(order):
        employee_id = employees[index].id
        reports = [nodes[child] for child in children.get(employee_id, []) if child in nodes]
        nodes[index] = HierarchyNode(id=employee_id, employees=reports or None)

    skipped = len(employees) - len(order)
    if skipped:
        logger.warning("%d employees could not be placed in the hierarchy", skipped)

    return [nodes[index] for index in roots if index in nodes]


def count_nodes(forest: Sequence[HierarchyNode]) -> int:
    total = 0
    stack = list(forest)
    while stack:
        node = stack.pop()
        total += 1
        stack.extend(node.employees or [])
    return total
