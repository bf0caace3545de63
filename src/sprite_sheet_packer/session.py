"""Long-lived pack session.

A session owns the state that must survive between pack attempts (the
last emitted coordinate map) and makes sure attempts never overlap.
"""

from typing import Callable

from .core.metadata import MetadataDiffer


class PackSession:
    """Serializes pack attempts for one build or watch session.

    Only one attempt runs at a time. A request that arrives while an
    attempt is in flight is not queued; it marks the session dirty, and all
    such requests collapse into a single follow-up attempt once the
    current one finishes.

    Example:
        >>> session = PackSession()
        >>> session.request(pipeline.run)
    """

    def __init__(self, differ: MetadataDiffer | None = None):
        self.differ = differ or MetadataDiffer()
        self.in_flight = False
        self.pending = False
        self.attempts = 0

    def request(self, attempt: Callable[[], object]) -> bool:
        """Run an attempt now, or schedule one follow-up if busy.

        Args:
            attempt: Callable performing one full pack attempt

        Returns:
            True if the attempt ran in this call, False if it was collapsed
            into the follow-up of the attempt already in flight

        Raises:
            Exception: Whatever the attempt raises. Pending follow-ups are
                dropped when an attempt fails.
        """
        if self.in_flight:
            self.pending = True
            return False

        self.in_flight = True
        try:
            while True:
                self.pending = False
                self.attempts += 1
                attempt()
                if not self.pending:
                    break
        except Exception:
            self.pending = False
            raise
        finally:
            self.in_flight = False
        return True
