from __future__ import annotations

from typing import Iterable, Iterator

from simpletons.body.tree import BodyTree


class Population:
    """Ordered sequence of body trees; the unit of persistence."""

    def __init__(self, trees: Iterable[BodyTree] = ()) -> None:
        self._trees: list[BodyTree] = list(trees)

    def append(self, tree: BodyTree) -> None:
        self._trees.append(tree)

    def extend(self, trees: Iterable[BodyTree]) -> None:
        self._trees.extend(trees)

    def __len__(self) -> int:
        return len(self._trees)

    def __iter__(self) -> Iterator[BodyTree]:
        return iter(self._trees)

    def __getitem__(self, index: int) -> BodyTree:
        return self._trees[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Population):
            return NotImplemented
        return self._trees == other._trees

    __hash__ = None  # type: ignore[assignment]

    def segment_count(self) -> int:
        return sum(len(tree) for tree in self._trees)

    def copy(self) -> "Population":
        return Population(tree.copy() for tree in self._trees)

    def __repr__(self) -> str:
        return f"Population(trees={len(self._trees)}, segments={self.segment_count()})"
