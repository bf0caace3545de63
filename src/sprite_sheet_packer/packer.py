"""Packer interface and the default Pillow-backed packer.

The pipeline treats the packer as a black box: it hands over a list of
candidates and receives the sheet image, its size and one rectangle per
identifier. BinaryTreePacker lays images out with a growing binary tree,
starting from the largest image and extending the sheet right or down as
needed. It does not try to find the densest layout.
"""

import io
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from PIL import Image

from .core.types import Rect
from .errors import PackerError
from .sources.base import ImageCandidate


@dataclass
class PackResult:
    """Output of a single pack.

    Attributes:
        image: Encoded sheet image
        width: Sheet width in pixels
        height: Sheet height in pixels
        placements: Identifier -> rectangle inside the sheet
    """

    image: bytes
    width: int
    height: int
    placements: dict[str, Rect] = field(default_factory=dict)


@runtime_checkable
class Packer(Protocol):
    """Anything that can pack candidates into one sheet."""

    def pack(self, candidates: list[ImageCandidate]) -> PackResult:
        """Pack every candidate into a single sheet.

        Raises:
            Exception: If any candidate cannot be decoded or placed
        """
        ...


@dataclass
class _Node:
    x: int
    y: int
    w: int
    h: int
    used: bool = False
    right: "_Node | None" = None
    down: "_Node | None" = None


class _GrowingTree:
    """Growing binary-tree layout for rectangles of known size."""

    def __init__(self, width: int, height: int):
        self.root = _Node(0, 0, width, height)

    def place(self, w: int, h: int) -> _Node:
        node = self._find(self.root, w, h)
        if node is not None:
            return self._split(node, w, h)
        return self._grow(w, h)

    def _find(self, node: _Node | None, w: int, h: int) -> _Node | None:
        if node is None:
            return None
        if node.used:
            return self._find(node.right, w, h) or self._find(node.down, w, h)
        if w <= node.w and h <= node.h:
            return node
        return None

    @staticmethod
    def _split(node: _Node, w: int, h: int) -> _Node:
        node.used = True
        node.down = _Node(node.x, node.y + h, node.w, node.h - h)
        node.right = _Node(node.x + w, node.y, node.w - w, h)
        return node

    def _grow(self, w: int, h: int) -> _Node:
        root = self.root
        can_grow_down = w <= root.w
        can_grow_right = h <= root.h

        # Keep the sheet roughly square
        should_grow_right = can_grow_right and root.h >= root.w + w
        should_grow_down = can_grow_down and root.w >= root.h + h

        if should_grow_right:
            return self._grow_right(w, h)
        if should_grow_down:
            return self._grow_down(w, h)
        if can_grow_right:
            return self._grow_right(w, h)
        if can_grow_down:
            return self._grow_down(w, h)
        # Blocks are placed largest first, so this is unreachable
        raise PackerError(f"Cannot place a {w}x{h} block")

    def _grow_right(self, w: int, h: int) -> _Node:
        old = self.root
        self.root = _Node(
            0, 0, old.w + w, old.h, used=True, down=old, right=_Node(old.w, 0, w, old.h)
        )
        return self._split(self._find(self.root, w, h), w, h)  # type: ignore[arg-type]

    def _grow_down(self, w: int, h: int) -> _Node:
        old = self.root
        self.root = _Node(
            0, 0, old.w, old.h + h, used=True, down=_Node(0, old.h, old.w, h), right=old
        )
        return self._split(self._find(self.root, w, h), w, h)  # type: ignore[arg-type]


class BinaryTreePacker:
    """Default packer: decodes with Pillow and writes a single PNG sheet.

    Example:
        >>> packer = BinaryTreePacker()
        >>> result = packer.pack([ImageCandidate("a.png", png_bytes)])
        >>> result.placements["a.png"]
        {'x': 0, 'y': 0, 'width': 16, 'height': 16}
    """

    def __init__(self, padding: int = 0, image_format: str = "PNG"):
        """Initialize the packer.

        Args:
            padding: Transparent pixels kept right of and below each image
            image_format: Pillow format name used to encode the sheet
        """
        if padding < 0:
            raise ValueError(f"padding must be >= 0, got {padding}")
        self.padding = padding
        self.image_format = image_format

    def pack(self, candidates: list[ImageCandidate]) -> PackResult:
        images: dict[str, Image.Image] = {}
        for candidate in candidates:
            with Image.open(io.BytesIO(candidate.contents)) as img:
                images[candidate.identifier] = img.convert("RGBA")

        if not images:
            return PackResult(image=b"", width=0, height=0)

        # Largest side first, then the other side, then insertion order
        order = sorted(
            images,
            key=lambda ident: (
                -max(images[ident].size),
                -min(images[ident].size),
                -images[ident].height,
            ),
        )

        first = images[order[0]]
        tree = _GrowingTree(first.width + self.padding, first.height + self.padding)

        placements: dict[str, Rect] = {}
        for ident in order:
            img = images[ident]
            node = tree.place(img.width + self.padding, img.height + self.padding)
            placements[ident] = Rect(x=node.x, y=node.y, width=img.width, height=img.height)

        width = max(rect["x"] + rect["width"] for rect in placements.values())
        height = max(rect["y"] + rect["height"] for rect in placements.values())

        sheet = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        for ident, rect in placements.items():
            sheet.paste(images[ident], (rect["x"], rect["y"]))

        buffer = io.BytesIO()
        sheet.save(buffer, format=self.image_format)

        # Report placements in candidate order
        ordered = {c.identifier: placements[c.identifier] for c in candidates}
        return PackResult(image=buffer.getvalue(), width=width, height=height, placements=ordered)
