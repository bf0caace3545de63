"""Base abstractions for candidate sources.

This module defines the interfaces the pipeline uses to discover
candidate files and read their contents, independent of whether they come
from a host build's asset set, a one-shot directory scan, or a watcher.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..config import SpriteOptions
    from ..reconcilers.base import Reconciler

ChangeEvent = Literal["added", "changed", "deleted", "renamed"]


@dataclass
class ImageCandidate:
    """One image handed to the packer.

    Attributes:
        identifier: Path-like identifier, unique within one pack attempt
        contents: Raw image bytes
    """

    identifier: str
    contents: bytes


@runtime_checkable
class AssetSet(Protocol):
    """Protocol for a host build's in-flight artifact set."""

    def identifiers(self) -> list[str]:
        """Return every artifact identifier in discovery order."""
        ...

    def source(self, identifier: str) -> bytes:
        """Return the raw contents of an artifact."""
        ...

    def update(self, identifier: str, contents: bytes) -> None:
        """Replace the contents of an existing artifact."""
        ...

    def emit(self, identifier: str, contents: bytes) -> None:
        """Add a new artifact to the set."""
        ...

    def delete(self, identifier: str) -> None:
        """Remove an artifact from the set."""
        ...


class CandidateSource(ABC):
    """Abstract base class for everything that supplies candidates.

    Implementations know where files come from and which reconciler
    should merge the sheet back, while the pipeline stays unaware of
    those details.
    """

    #: Key strategy used when the options leave it unset
    default_key_strategy = "basename"
    #: Frame shape used when the options leave it unset
    default_frame_shape = "full"

    @abstractmethod
    def list_files(self) -> list[str]:
        """List every candidate identifier currently known.

        Returns:
            Identifiers in discovery order
        """
        pass

    @abstractmethod
    def read_bytes(self, identifier: str) -> bytes:
        """Read the raw contents of one candidate.

        Raises:
            KeyError: If the identifier is unknown (asset sets)
            OSError: If the file cannot be read (filesystem sources)
        """
        pass

    @abstractmethod
    def get_reconciler(self, options: "SpriteOptions") -> "Reconciler":
        """Return the reconciler that merges a sheet back for this source."""
        pass


class Watcher(CandidateSource):
    """A candidate source that keeps observing its roots.

    Watchers become ready after their first scan and then report
    batches of (event, path) changes through poll().
    """

    @property
    @abstractmethod
    def ready(self) -> bool:
        """True once the initial scan has completed."""
        pass

    @abstractmethod
    def start(self) -> None:
        """Run the initial scan."""
        pass

    @abstractmethod
    def poll(self) -> list[tuple[ChangeEvent, str]]:
        """Return the changes observed since the previous poll."""
        pass

    @abstractmethod
    def watched(self) -> dict[str, list[str]]:
        """Return known files grouped by directory."""
        pass

    def list_files(self) -> list[str]:
        """Flatten watched() into a single discovery-ordered list."""
        return [path for paths in self.watched().values() for path in paths]
