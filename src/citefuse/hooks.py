"""Explicit hook registrations for extending citation fusion.

A ``HookRegistry`` is an ordinary object passed to the call site that
dispatches hooks; there is no process-wide registry.

Hook names used by the demultiplexer
------------------------------------
candidate_scored
    Called with ``(hook_name, scored_candidate)`` for every live candidate.
    A truthy return excludes the candidate from fusion.
citation_fused
    Called with ``(hook_name, citation)`` after fusion. Return values are
    ignored by the demultiplexer.
"""

from collections.abc import Callable
from enum import IntEnum
from typing import Any

__all__ = [
    "HOOK_CANDIDATE_SCORED",
    "HOOK_CITATION_FUSED",
    "HookCallback",
    "HookRegistry",
    "HookSequence",
]

HOOK_CANDIDATE_SCORED = "candidate_scored"
HOOK_CITATION_FUSED = "citation_fused"

HookCallback = Callable[..., Any]


class HookSequence(IntEnum):
    """Dispatch priority; lower values run first."""

    CORE = 0x000
    NORMAL = 0x100
    LATE = 0x200
    LAST = 0x300


class HookRegistry:
    """Ordered callback registrations keyed by hook name.

    Callbacks run by ascending sequence, then in registration order. The
    first callback returning a truthy value stops dispatch.

    Parameters
    ----------
    record_calls : bool, optional
        Keep a list of every ``call()`` in ``called_hooks``.
    """

    def __init__(self, record_calls: bool = False) -> None:
        self._hooks: dict[str, dict[int, list[HookCallback]]] = {}
        self.record_calls = record_calls
        self.called_hooks: list[tuple[str, tuple[Any, ...]]] = []

    def register(
        self,
        hook_name: str,
        callback: HookCallback,
        sequence: int = HookSequence.NORMAL,
    ) -> None:
        """Register a callback against a hook name.

        Parameters
        ----------
        hook_name : str
            Hook to register against.
        callback : HookCallback
            Called as ``callback(hook_name, *args)``.
        sequence : int, optional
            Dispatch priority, by default ``HookSequence.NORMAL``.
        """
        self._hooks.setdefault(hook_name, {}).setdefault(int(sequence), []).append(callback)

    def get_hooks(self, hook_name: str) -> list[HookCallback]:
        """Return callbacks for a hook in dispatch order."""
        by_sequence = self._hooks.get(hook_name, {})
        return [cb for seq in sorted(by_sequence) for cb in by_sequence[seq]]

    def unregister(self, hook_name: str, callback: HookCallback) -> bool:
        """Remove the first registration of a callback.

        Returns
        -------
        bool
            True if a registration was removed.
        """
        for callbacks in self._hooks.get(hook_name, {}).values():
            if callback in callbacks:
                callbacks.remove(callback)
                return True
        return False

    def clear(self, hook_name: str) -> None:
        """Remove all callbacks registered against a hook name."""
        self._hooks.pop(hook_name, None)

    def call(self, hook_name: str, *args: Any) -> bool:
        """Dispatch a hook.

        Parameters
        ----------
        hook_name : str
            Hook to dispatch.
        *args : Any
            Passed to each callback after the hook name.

        Returns
        -------
        bool
            True if a callback returned a truthy value, False otherwise.
        """
        if self.record_calls:
            self.called_hooks.append((hook_name, args))

        for callback in self.get_hooks(hook_name):
            if callback(hook_name, *args):
                return True
        return False

    def reset_called_hooks(self) -> None:
        """Forget recorded calls."""
        self.called_hooks.clear()
