"""In-pipeline reconciler.

Replaces the packed images inside a host build's asset set with the
sheet, so the build emits one image instead of many.
"""

from pathlib import Path

from ..builder import SheetBuild
from ..core.metadata import dumps_metadata
from ..sources.base import AssetSet
from .base import Done, Reconciler


class BuildAssetsReconciler(Reconciler):
    """Reconciler for host asset sets.

    The sheet takes over the slot of the first packed identifier and every
    other packed slot is deleted, leaving exactly one artifact for the whole
    set. Set ``sheet_name`` to store the sheet under a fixed identifier
    instead; all packed slots are then deleted.

    Example:
        >>> reconciler = BuildAssetsReconciler(assets, coordinate_path=Path("coords.json"))
        >>> reconciler.reconcile(build, ["x.png", "y.png", "z.png"])
        >>> assets.identifiers()
        ['x.png']
    """

    def __init__(
        self,
        assets: AssetSet,
        coordinate_path: Path | None = None,
        sheet_name: str | None = None,
    ):
        """Initialize the reconciler.

        Args:
            assets: The host's in-flight asset set
            coordinate_path: Where to write the coordinate map when it
                changes. No metadata file is written if None.
            sheet_name: Identifier for the sheet. Defaults to the first
                packed identifier.
        """
        self.assets = assets
        self.coordinate_path = coordinate_path
        self.sheet_name = sheet_name

    def reconcile(
        self,
        build: SheetBuild,
        identifiers: list[str],
        done: Done | None = None,
    ) -> None:
        if not identifiers:
            raise ValueError("Cannot reconcile a sheet without packed identifiers")

        if self.sheet_name is None:
            target = identifiers[0]
            self.assets.update(target, build.image)
            for identifier in identifiers[1:]:
                self.assets.delete(identifier)
        else:
            for identifier in identifiers:
                if identifier != self.sheet_name:
                    self.assets.delete(identifier)
            if self.sheet_name in self.assets.identifiers():
                self.assets.update(self.sheet_name, build.image)
            else:
                self.assets.emit(self.sheet_name, build.image)

        if build.metadata_changed and self.coordinate_path is not None:
            self.coordinate_path.parent.mkdir(parents=True, exist_ok=True)
            self.coordinate_path.write_text(dumps_metadata(build.metadata), encoding="utf-8")

        if done:
            done()
