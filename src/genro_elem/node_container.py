# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""NodeContainer: ordered children of an ElemNode with positional insert."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .elem_node import AnyNode


class NodeContainer:
    """Ordered container for the children of an element node.

    Children can be accessed by label or numeric index. Labels are unique
    within one container and are minted by unique_label() when a node is
    attached. The container is only mutated through ElemNode.append_child()
    and ElemNodeBase.detach(), which keep node.parent in sync.

    Internal structure:
        _dict: maps label -> node (for O(1) lookup by label)
        _list: contains nodes in document order
        _counters: next free index per label prefix
    """

    def __init__(self) -> None:
        self._dict: dict[str, AnyNode] = {}
        self._list: list[AnyNode] = []
        self._counters: dict[str, int] = {}

    def unique_label(self, prefix: str) -> str:
        """Mint a free '<prefix>_<n>' label.

        Indexes only grow, so a label freed by a removal is not reused.
        """
        n = self._counters.get(prefix, 0)
        while f'{prefix}_{n}' in self._dict:
            n += 1
        self._counters[prefix] = n + 1
        return f'{prefix}_{n}'

    def index(self, label: str) -> int:
        """Return the index of a label in this container, or -1 if not found."""
        node = self._dict.get(label)
        if node is None:
            return -1
        return next(i for i, item in enumerate(self._list) if item is node)

    def _parse_position(self, position: str | None) -> int:
        """Parse position syntax and return insertion index.

        Args:
            position: None or '>' to append at the end, '>label' to insert
                after label. An unknown label appends at the end.
        """
        if position is None or position == '>':
            return len(self._list)
        if position.startswith('>'):
            idx = self.index(position[1:])
            if idx >= 0:
                return idx + 1
        return len(self._list)

    def __getitem__(self, key: str | int) -> AnyNode | None:
        """Get node by label or index. Missing keys return None."""
        if isinstance(key, str):
            return self._dict.get(key)
        if 0 <= key < len(self._list):
            return self._list[key]
        return None

    def __contains__(self, key: str) -> bool:
        return key in self._dict

    def __len__(self) -> int:
        return len(self._list)

    def __iter__(self) -> Iterator[AnyNode]:
        return iter(self._list)

    def keys(self) -> list[str]:
        """Labels in document order."""
        return [node.label for node in self._list]

    def set(self, node: AnyNode, _position: str | None = '>') -> None:
        """Insert node, keyed by its label, at the given position."""
        idx = self._parse_position(_position)
        self._dict[node.label] = node
        self._list.insert(idx, node)

    def remove(self, node: AnyNode) -> None:
        """Remove a node (by identity) if present. Use ElemNodeBase.detach() instead."""
        if self._dict.get(node.label) is not node:
            return
        del self._dict[node.label]
        self._list.remove(node)
