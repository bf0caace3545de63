"""Host build asset set source.

This module provides a CandidateSource over a host build's in-flight
asset set, plus a dict-backed AssetSet for hosts that keep their
artifacts in memory.
"""

from ...config import SpriteOptions
from ...reconcilers.build import BuildAssetsReconciler
from ...sources.base import AssetSet, CandidateSource


class InMemoryAssetSet:
    """Dict-backed AssetSet.

    Insertion order is the discovery order.

    Example:
        >>> assets = InMemoryAssetSet({"x.png": b"...", "y.png": b"..."})
        >>> assets.delete("y.png")
        >>> assets.identifiers()
        ['x.png']
    """

    def __init__(self, artifacts: dict[str, bytes] | None = None):
        self.artifacts: dict[str, bytes] = dict(artifacts or {})

    def identifiers(self) -> list[str]:
        return list(self.artifacts)

    def source(self, identifier: str) -> bytes:
        try:
            return self.artifacts[identifier]
        except KeyError:
            raise KeyError(f"No asset found with identifier: {identifier}") from None

    def update(self, identifier: str, contents: bytes) -> None:
        if identifier not in self.artifacts:
            raise KeyError(f"No asset found with identifier: {identifier}")
        self.artifacts[identifier] = contents

    def emit(self, identifier: str, contents: bytes) -> None:
        if identifier in self.artifacts:
            raise KeyError(f"Asset already exists: {identifier}")
        self.artifacts[identifier] = contents

    def delete(self, identifier: str) -> None:
        self.artifacts.pop(identifier, None)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.artifacts

    def __len__(self) -> int:
        return len(self.artifacts)


class AssetSetSource(CandidateSource):
    """Source adapter for a host build's asset set.

    Identifiers are the host's build-relative artifact names. Frame keys
    default to the basename and frames keep the packer's width/height
    field names.

    Example:
        >>> source = AssetSetSource(assets)
        >>> source.list_files()
        ['icons/a.png', 'icons/b.png', 'main.js']
    """

    default_key_strategy = "basename"
    default_frame_shape = "full"

    def __init__(self, assets: AssetSet):
        self.assets = assets

    def list_files(self) -> list[str]:
        return self.assets.identifiers()

    def read_bytes(self, identifier: str) -> bytes:
        return self.assets.source(identifier)

    def get_reconciler(self, options: SpriteOptions) -> BuildAssetsReconciler:
        return BuildAssetsReconciler(
            self.assets,
            coordinate_path=options.resolve_coordinate_path(),
            sheet_name=options.sheet_name,
        )
