"""Sheet building: pack candidates and derive their coordinate map."""

from dataclasses import dataclass

from .core.metadata import MetadataDiffer, build_coordinate_metadata, to_frame
from .core.types import CoordinateMetadata, FrameShape, Rect
from .errors import PackerError
from .keys import get_key_strategy
from .packer import Packer, PackResult
from .sources.base import ImageCandidate


@dataclass
class SheetBuild:
    """Everything one successful pack attempt produced.

    Attributes:
        result: Raw packer output (sheet image and placements)
        metadata: Coordinate map keyed by frame key
        metadata_changed: False if the map equals the last emitted one
    """

    result: PackResult
    metadata: CoordinateMetadata
    metadata_changed: bool

    @property
    def image(self) -> bytes:
        return self.result.image

    @property
    def placements(self) -> dict[str, Rect]:
        return self.result.placements


class SheetBuilder:
    """Runs the packer and turns its output into a coordinate map.

    The builder shares its MetadataDiffer with every attempt of a session,
    so it reports whether the map changed since the previous attempt.
    """

    def __init__(
        self,
        packer: Packer,
        differ: MetadataDiffer,
        key_strategy: str = "basename",
        frame_shape: FrameShape = "full",
    ):
        """Initialize the builder.

        Args:
            packer: Packer invoked once per non-empty attempt
            differ: Change detector holding the last emitted map
            key_strategy: Name of the frame key strategy
            frame_shape: "full" or "compact" frame fields

        Raises:
            ConfigurationError: If the key strategy or frame shape is unknown
        """
        self.packer = packer
        self.differ = differ
        self.key_fn = get_key_strategy(key_strategy)
        self.frame_shape = frame_shape
        # Reject an unknown shape up front rather than after packing
        to_frame(Rect(x=0, y=0, width=0, height=0), frame_shape)

    def build(self, candidates: list[ImageCandidate]) -> SheetBuild | None:
        """Pack the candidates into one sheet.

        Args:
            candidates: Qualifying images in discovery order

        Returns:
            SheetBuild, or None if there was nothing to pack

        Raises:
            PackerError: If the packer fails. The attempt is not retried,
                since the same input fails the same way.
        """
        if not candidates:
            return None

        try:
            result = self.packer.pack(candidates)
        except PackerError:
            raise
        except Exception as e:
            raise PackerError(f"Failed to pack {len(candidates)} images: {e}") from e

        metadata = build_coordinate_metadata(result, self.key_fn, self.frame_shape)
        changed = not self.differ.is_unchanged(metadata)

        return SheetBuild(result=result, metadata=metadata, metadata_changed=changed)
