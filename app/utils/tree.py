"""평면 목록 → 트리 변환 유틸리티.

Flat list to tree utilities.
Rebuilds a forest from records that carry their own id and their
parent's id. A record is a root when its parent is not part of the
list, so a filtered list yields its highest matching ancestors as roots
and no record is attached twice. Records caught in a parent cycle have
no root above them and are left out.
"""

from collections import defaultdict, deque
from typing import Any, Callable, Hashable, Iterable, Sequence, TypeVar

T = TypeVar("T")
N = TypeVar("N")


def find_roots(
    items: Sequence[T],
    key: Callable[[T], Hashable],
    parent_key: Callable[[T], Hashable],
) -> list[T]:
    """부모가 목록에 없는 항목만 반환합니다 (입력 순서 유지).

    Return the items whose parent id matches no id in the list,
    preserving input order.
    """
    ids: set[Hashable] = {key(item) for item in items}
    return [item for item in items if parent_key(item) not in ids]


def build_forest(
    items: Sequence[T],
    key: Callable[[T], Hashable],
    parent_key: Callable[[T], Hashable],
    to_node: Callable[[T], N],
    set_children: Callable[[N, list[N]], Any],
    sort_key: Callable[[T], Any] | None = None,
) -> list[N]:
    """평면 목록으로 트리(포레스트)를 구성합니다.

    Build a forest from a flat list.

    Args:
        items: 평면 레코드 목록 (Flat records)
        key: 레코드 ID 추출 함수 (Returns a record's id)
        parent_key: 상위 ID 추출 함수 (Returns a record's parent id)
        to_node: 레코드 → 노드 변환 함수 (Maps a record to an output node)
        set_children: 노드에 자식 목록을 설정하는 함수 (Attaches children to a node)
        sort_key: 형제 정렬 키, None이면 입력 순서 (Sibling sort key; None keeps input order)

    Returns:
        list[N]: 루트 노드 목록 (Root nodes with children attached)
    """
    if not items:
        return []

    children_of: dict[Hashable, list[T]] = defaultdict(list)
    for item in items:
        children_of[parent_key(item)].append(item)

    def _ordered(records: list[T]) -> list[T]:
        return sorted(records, key=sort_key) if sort_key is not None else records

    def _build(item: T, seen: set[Hashable]) -> N:
        node: N = to_node(item)
        item_id: Hashable = key(item)
        seen.add(item_id)
        children: list[N] = [
            _build(child, seen)
            for child in _ordered(children_of.get(item_id, []))
            if key(child) not in seen
        ]
        set_children(node, children)
        return node

    seen: set[Hashable] = set()
    return [_build(root, seen) for root in _ordered(find_roots(items, key, parent_key))]


def collect_descendants(
    edges: Iterable[tuple[Hashable, Hashable]],
    start_ids: Iterable[Hashable],
) -> set[Hashable]:
    """시작 ID들의 모든 하위 ID를 반환합니다 (시작 ID 제외).

    Return every id below ``start_ids`` given ``(id, parent_id)`` edges.
    The start ids themselves are not included unless they sit below
    another start id.
    """
    children_of: dict[Hashable, list[Hashable]] = defaultdict(list)
    for node_id, parent_id in edges:
        children_of[parent_id].append(node_id)

    found: set[Hashable] = set()
    queue: deque[Hashable] = deque(start_ids)
    while queue:
        current = queue.popleft()
        for child in children_of.get(current, []):
            if child not in found:
                found.add(child)
                queue.append(child)
    return found
