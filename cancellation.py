"""Cooperative cancellation token shared by one categorization run."""

from typing import Callable, List

from errors import OperationCancelled


class CancellationToken:
    """A one-way cancellation flag.

    The token is created fresh for every run, set at most once (by the user),
    and inspected at fixed checkpoints. Setting it never interrupts an
    in-flight request; it only prevents the next step.
    """

    def __init__(self):
        self._cancelled = False
        self._callbacks: List[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> bool:
        """Set the flag. Returns False if it was already set."""
        if self._cancelled:
            return False
        self._cancelled = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()
        return True

    def raise_if_cancelled(self) -> None:
        """Checkpoint: raise OperationCancelled when the flag is set."""
        if self._cancelled:
            raise OperationCancelled()

    def add_callback(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` when the token is cancelled (immediately if it already is)."""
        if self._cancelled:
            callback()
        else:
            self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[], None]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)
