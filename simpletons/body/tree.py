from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator

from loguru import logger
import networkx as nx
from pydantic import BaseModel, ConfigDict, Field

from simpletons.body.joint import Joint
from simpletons.body.segment import SegmentDefinition
from simpletons.exceptions import (
    InvalidNodeError,
    TreeStructureError,
    TreeValidationError,
)
from simpletons.genes.mutation import MutationGenerator, mutate_holder

if TYPE_CHECKING:
    from simpletons.body.realizer import TreeRealizer

NodeHandle = int


class NodeDocument(BaseModel):
    """One serialized node: its segment and its incoming edge."""

    segment: SegmentDefinition = Field(description="Segment with raw gene values")
    parent: int | None = Field(
        default=None, ge=0, description="Parent node index (null for the root)"
    )
    joint: Joint | None = Field(
        default=None, description="Joint on the edge to the parent (null for the root)"
    )
    model_config = ConfigDict(extra="forbid")


class BodyTreeDocument(BaseModel):
    """Serialized body tree; node indices are the tree's node handles."""

    root: int = Field(default=0, ge=0, description="Index of the root node")
    nodes: list[NodeDocument] = Field(min_length=1, description="Nodes in handle order")
    model_config = ConfigDict(extra="forbid")


@dataclass
class _Node:
    segment: SegmentDefinition
    parent: NodeHandle | None
    joint: Joint | None


class BodyTree:
    """Rooted tree of segment definitions connected by joints.

    Nodes live in an arena and are addressed by stable integer handles. Each
    node keeps its parent handle and incoming joint; children are indexed
    incrementally in insertion order, which makes traversal (and therefore
    realization side effects) reproducible.

    The tree owns its segments exclusively. Mutation changes gene values in
    place and never touches topology or joints.
    """

    def __init__(self, root_segment: SegmentDefinition) -> None:
        self._nodes: list[_Node] = [_Node(root_segment, None, None)]
        self._children: list[list[NodeHandle]] = [[]]
        self._root: NodeHandle = 0

    @classmethod
    def with_root(cls, segment: SegmentDefinition) -> "BodyTree":
        return cls(segment)

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @property
    def root(self) -> NodeHandle:
        return self._root

    def __len__(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._nodes) - 1

    def handles(self) -> Iterator[NodeHandle]:
        return iter(range(len(self._nodes)))

    def contains(self, handle: Any) -> bool:
        return (
            isinstance(handle, int)
            and not isinstance(handle, bool)
            and 0 <= handle < len(self._nodes)
        )

    def _check(self, handle: Any) -> None:
        if not self.contains(handle):
            raise InvalidNodeError(
                f"Node handle {handle!r} is not in this tree ({len(self._nodes)} nodes)"
            )

    def add_child(
        self, parent: NodeHandle, segment: SegmentDefinition, joint: Joint
    ) -> NodeHandle:
        """Append *segment* as a child of *parent* via *joint*.

        There is no arity limit; growth policies bound the branching.
        """
        self._check(parent)
        if joint.is_ground:
            raise TreeStructureError(
                "A ground joint marks the root attachment and cannot label a child edge"
            )
        handle = len(self._nodes)
        self._nodes.append(_Node(segment, parent, joint))
        self._children.append([])
        self._children[parent].append(handle)
        return handle

    def children_of(self, handle: NodeHandle) -> list[tuple[NodeHandle, Joint]]:
        """Direct children of *handle* with their incoming joints, in insertion order."""
        self._check(handle)
        return [(child, self._nodes[child].joint) for child in self._children[handle]]

    def parent_of(self, handle: NodeHandle) -> tuple[NodeHandle, Joint] | None:
        self._check(handle)
        node = self._nodes[handle]
        if node.parent is None:
            return None
        return node.parent, node.joint

    def segment(self, handle: NodeHandle) -> SegmentDefinition:
        self._check(handle)
        return self._nodes[handle].segment

    def segments(self) -> Iterator[SegmentDefinition]:
        for node in self._nodes:
            yield node.segment

    def depth_of(self, handle: NodeHandle) -> int:
        """Number of edges between *handle* and the root."""
        self._check(handle)
        depth = 0
        parent = self._nodes[handle].parent
        while parent is not None:
            depth += 1
            parent = self._nodes[parent].parent
        return depth

    def max_depth(self) -> int:
        """Edges on the longest root-to-leaf path."""
        deepest = 0
        stack = [(self._root, 0)]
        while stack:
            handle, depth = stack.pop()
            deepest = max(deepest, depth)
            stack.extend((child, depth + 1) for child in self._children[handle])
        return deepest

    def validate_structure(self) -> list[str]:
        """Check that the stored parent links form one tree rooted at ``root``.

        Returns a list of validation error messages. Empty list means valid.
        """
        errors: list[str] = []

        G = nx.DiGraph()
        G.add_nodes_from(range(len(self._nodes)))
        for handle, node in enumerate(self._nodes):
            if node.parent is not None:
                G.add_edge(node.parent, handle)
            if (node.parent is None) != (node.joint is None):
                errors.append(f"Node {handle}: joint must be present exactly when a parent is")

        roots = [h for h in G.nodes if G.in_degree(h) == 0]
        if roots != [self._root]:
            errors.append(f"Expected a single root {self._root}, found roots {roots}")

        if not nx.is_arborescence(G):
            try:
                cycle_edges = nx.find_cycle(G, orientation="original")
                cycle_nodes = [cycle_edges[0][0]] + [v for (_, v, *_) in cycle_edges]
                errors.append(
                    "Cycle detected in parent links: "
                    + " -> ".join(str(n) for n in cycle_nodes)
                )
            except nx.NetworkXNoCycle:
                errors.append("Parent links do not form a single connected tree")

        for handle, children in enumerate(self._children):
            for child in children:
                if self._nodes[child].parent != handle:
                    errors.append(f"Child index of {handle} lists {child}, whose parent differs")

        return errors

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def realize(self, realizer: TreeRealizer) -> None:
        """Walk the tree pre-order, handing every segment to *realizer*.

        ``realizer.root()`` supplies the synthetic parent handle and joint for
        the root node. Each node's returned handle becomes the parent handle of
        its children, which are visited in insertion order. An explicit stack
        keeps very deep trees off the interpreter's recursion limit.
        """
        parent_handle, parent_joint = realizer.root()
        stack: list[tuple[NodeHandle, Any, Joint]] = [
            (self._root, parent_handle, parent_joint)
        ]
        visited = 0
        while stack:
            current, parent_handle, parent_joint = stack.pop()
            handle = realizer.new_segment(
                self._nodes[current].segment, parent_handle, parent_joint
            )
            visited += 1
            for child in reversed(self._children[current]):
                stack.append((child, handle, self._nodes[child].joint))

        logger.debug(
            "[BodyTree] Realized {} segment(s) via {}",
            visited,
            type(realizer).__name__,
        )

    def mutate(self, generator: MutationGenerator) -> int:
        """Perturb every gene of every segment in place.

        Returns:
            Number of genes whose raw value changed.
        """
        changed = 0
        for node in self._nodes:
            changed += mutate_holder(node.segment, generator)
        logger.debug(
            "[BodyTree] Mutation changed {} gene(s) across {} segment(s)",
            changed,
            len(self._nodes),
        )
        return changed

    # ------------------------------------------------------------------
    # (De)serialization
    # ------------------------------------------------------------------

    def to_document(self) -> BodyTreeDocument:
        return BodyTreeDocument(
            root=self._root,
            nodes=[
                NodeDocument(
                    segment=node.segment.model_copy(deep=True),
                    parent=node.parent,
                    joint=node.joint.model_copy(deep=True) if node.joint else None,
                )
                for node in self._nodes
            ],
        )

    @classmethod
    def from_document(cls, document: BodyTreeDocument) -> "BodyTree":
        """Rebuild a tree, rejecting documents whose links are not a rooted tree."""
        count = len(document.nodes)
        if document.root >= count:
            raise TreeValidationError(
                f"Root index {document.root} out of range for {count} node(s)"
            )
        for index, node in enumerate(document.nodes):
            if node.parent is not None and node.parent >= count:
                raise TreeValidationError(
                    f"Node {index}: parent index {node.parent} out of range"
                )
            if node.joint is not None and node.joint.is_ground:
                raise TreeValidationError(
                    f"Node {index}: ground joints cannot label a child edge"
                )

        tree = cls.__new__(cls)
        tree._root = document.root
        tree._nodes = [
            _Node(
                node.segment.model_copy(deep=True),
                node.parent,
                node.joint.model_copy(deep=True) if node.joint else None,
            )
            for node in document.nodes
        ]
        tree._children = [[] for _ in range(count)]
        for index, node in enumerate(document.nodes):
            if node.parent is not None:
                tree._children[node.parent].append(index)

        errors = tree.validate_structure()
        if errors:
            raise TreeValidationError("; ".join(errors))
        return tree

    def copy(self) -> "BodyTree":
        """Independent deep copy with identical handles."""
        return BodyTree.from_document(self.to_document())

    def __eq__(self, other: object) -> bool:
        """Structural equality: same topology, handles, joints and raw genes."""
        if not isinstance(other, BodyTree):
            return NotImplemented
        return self._root == other._root and self._nodes == other._nodes

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"BodyTree(nodes={len(self._nodes)}, root={self._root}, "
            f"depth={self.max_depth()})"
        )
