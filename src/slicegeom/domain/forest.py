"""Nested-contour forest produced by the clipping collaborator.

The root node carries an empty contour; its children are outer boundaries,
their children are holes, the holes' children are islands, and so on.
"""

from dataclasses import dataclass, field

from slicegeom.domain.contour import Contour


@dataclass
class ContourNode:
    """A node in the contour nesting tree.

    Attributes:
        contour: Contour of this node (empty for the root)
        children: Nodes for the contours immediately nested inside this one
        depth: Nesting depth (0 for the root, 1 for outer boundaries)
    """

    contour: Contour = field(default_factory=Contour)
    children: list["ContourNode"] = field(default_factory=list)
    depth: int = 0

    @property
    def is_hole(self) -> bool:
        """Even depths below the root are holes."""
        return self.depth > 0 and self.depth % 2 == 0

    def add_child(self, contour: Contour) -> "ContourNode":
        """Append a child node one level deeper and return it."""
        child = ContourNode(contour=contour, depth=self.depth + 1)
        self.children.append(child)
        return child

    def iter_nodes(self):
        """Yield all descendants depth-first, excluding this node."""
        for child in self.children:
            yield child
            yield from child.iter_nodes()
