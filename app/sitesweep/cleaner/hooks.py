"""Hook registry for cleanup notifications.

Callbacks are registered per (owner, event) pair and invoked in
priority order when the event is triggered. Return values are ignored.
"""

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

# Lower weight runs first
PRIORITIES: dict[str, int] = {"high": 0, "normal": 1, "low": 2}

Hook = Callable[..., Any]


class HookRegistry:
    """Registry of callbacks keyed by owner and event name."""

    def __init__(self) -> None:
        self._hooks: dict[tuple[str, str], list[tuple[int, int, Hook]]] = defaultdict(list)
        self._counter = 0

    def register(self, owner: str, event: str, callback: Hook, priority: str = "normal") -> None:
        """Register a callback for an owner's event.

        Args:
            owner: Hook owner (e.g., "clean").
            event: Event name (e.g., "on_obsolete").
            callback: Callable invoked with the trigger arguments.
            priority: One of "high", "normal" or "low".

        Raises:
            ValueError: If the priority is unknown.
        """
        if priority not in PRIORITIES:
            msg = f"Unknown hook priority '{priority}', expected one of {sorted(PRIORITIES)}"
            raise ValueError(msg)

        self._hooks[(owner, event)].append((PRIORITIES[priority], self._counter, callback))
        self._counter += 1

    def trigger(self, owner: str, event: str, *args: Any) -> None:
        """Invoke every callback registered for an owner's event."""
        hooks = sorted(self._hooks.get((owner, event), []), key=lambda h: (h[0], h[1]))
        logger.debug("Triggering %s:%s (%d hook(s))", owner, event, len(hooks))
        for _, _, callback in hooks:
            callback(*args)
