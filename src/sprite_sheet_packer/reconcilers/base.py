"""Base reconciler class for merging a packed sheet into the build output."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from ..builder import SheetBuild

Done = Callable[[], None]


class Reconciler(ABC):
    """Abstract base class for reconcilers.

    A reconciler receives the result of one pack attempt together with the
    qualifying identifiers (in discovery order) and makes the sheet and its
    metadata visible to consumers.
    """

    @abstractmethod
    def reconcile(
        self,
        build: "SheetBuild",
        identifiers: list[str],
        done: Done | None = None,
    ) -> None:
        """Merge the sheet into the output.

        Args:
            build: Result of the pack attempt
            identifiers: Identifiers that were packed, in discovery order
            done: Optional completion signal

        Raises:
            Exception: If reconciliation fails
        """
        pass
