"""부서 트리 구성 단위 테스트.

Unit tests for the flat-list to tree helpers and the department
list-tree / tree-select builders. No database involved.
"""

from datetime import datetime, timezone

from app.schemas.department import DepartmentResponse
from app.services.department_service import department_service
from app.utils.tree import build_forest, collect_descendants, find_roots

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _dept(id: str, parent_id: str | None, sort: int = 999, name: str | None = None) -> DepartmentResponse:
    return DepartmentResponse(
        id=id,
        parent_id=parent_id,
        name=name or f"dept-{id}",
        description=None,
        sort=sort,
        is_active=True,
        created_by=None,
        created_at=NOW,
        updated_by=None,
        updated_at=None,
    )


class TestFindRoots:
    """루트 판별 테스트."""

    def test_parent_outside_list_is_root(self):
        items = [("b", "a"), ("c", "b"), ("d", None)]
        roots = find_roots(items, key=lambda i: i[0], parent_key=lambda i: i[1])
        assert roots == [("b", "a"), ("d", None)]

    def test_empty(self):
        assert find_roots([], key=lambda i: i, parent_key=lambda i: i) == []


class TestBuildForest:
    """포레스트 구성 테스트."""

    def test_cycle_members_are_dropped(self):
        """순환 참조에 있는 항목은 루트가 될 수 없음."""
        items = [("a", "b"), ("b", "a"), ("c", None)]
        forest = build_forest(
            items,
            key=lambda i: i[0],
            parent_key=lambda i: i[1],
            to_node=lambda i: {"id": i[0]},
            set_children=lambda node, children: node.update(children=children),
        )
        assert forest == [{"id": "c", "children": []}]

    def test_sort_key_orders_roots_and_siblings(self):
        items = [("r", None, 2), ("q", None, 1), ("x", "q", 9), ("y", "q", 3)]
        forest = build_forest(
            items,
            key=lambda i: i[0],
            parent_key=lambda i: i[1],
            to_node=lambda i: {"id": i[0]},
            set_children=lambda node, children: node.update(children=children),
            sort_key=lambda i: i[2],
        )
        assert [n["id"] for n in forest] == ["q", "r"]
        assert [c["id"] for c in forest[0]["children"]] == ["y", "x"]


class TestCollectDescendants:
    """하위 ID 수집 테스트."""

    def test_collects_all_levels(self):
        edges = [("b", "a"), ("c", "b"), ("d", "c"), ("e", "x")]
        assert collect_descendants(edges, ["a"]) == {"b", "c", "d"}

    def test_start_not_included(self):
        assert collect_descendants([("b", "a")], ["b"]) == set()

    def test_cycle_terminates(self):
        edges = [("a", "b"), ("b", "a")]
        assert collect_descendants(edges, ["a"]) == {"a", "b"}


class TestBuildListTree:
    """목록 트리 구성 테스트."""

    def test_empty_list(self):
        assert department_service.build_list_tree([]) == []

    def test_nested_children_keep_input_order(self):
        depts = [
            _dept("1", None),
            _dept("2", "1", sort=20),
            _dept("3", "1", sort=10),
            _dept("4", "2"),
        ]
        roots = department_service.build_list_tree(depts)
        assert [r.id for r in roots] == ["1"]
        assert [c.id for c in roots[0].children] == ["2", "3"]
        assert [c.id for c in roots[0].children[0].children] == ["4"]

    def test_missing_parent_makes_multiple_roots(self):
        depts = [_dept("2", "1"), _dept("3", "1"), _dept("4", "2")]
        roots = department_service.build_list_tree(depts)
        assert [r.id for r in roots] == ["2", "3"]
        assert [c.id for c in roots[0].children] == ["4"]

    def test_input_is_not_mutated(self):
        depts = [_dept("1", None), _dept("2", "1")]
        department_service.build_list_tree(depts)
        assert depts[0].children == []


class TestBuildTree:
    """트리 선택용 노드 구성 테스트."""

    def test_siblings_sorted_by_weight(self):
        depts = [
            _dept("1", None, sort=1, name="Root"),
            _dept("2", "1", sort=30),
            _dept("3", "1", sort=10),
            _dept("4", "1", sort=20),
        ]
        nodes = department_service.build_tree(depts)
        assert len(nodes) == 1
        assert nodes[0].name == "Root"
        assert nodes[0].weight == 1
        assert [c.id for c in nodes[0].children] == ["3", "4", "2"]
        assert nodes[0].children[0].parent_id == "1"

    def test_empty_list(self):
        assert department_service.build_tree([]) == []
