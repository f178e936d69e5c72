"""
conceptdb.events  ──  Decorators for table lifecycle hooks

    @on.create(Task)
    def announce(table: str, fragment: Fragment[Task]) -> None: ...
"""

from __future__ import annotations
from typing import Callable, Dict, Set, TYPE_CHECKING
from collections import defaultdict

if TYPE_CHECKING:
    from .core.fragment import Fragment

Handler = Callable[[str, "Fragment"], None]


class EventRegistry:
    """Central registry for event handlers"""

    def __init__(self):
        # Maps event type -> record class -> set of handlers
        self._handlers: Dict[str, Dict[type, Set[Handler]]] = {
            "create": defaultdict(set),
            "delete": defaultdict(set),
        }

    def register(
        self,
        event_type: str,
        record_types: tuple[type, ...],
        handler: Handler,
    ) -> None:
        """Register a handler for specific record types"""
        for cls in record_types:
            self._handlers[event_type][cls].add(handler)

    def emit(self, event_type: str, table: str, fragment: Fragment) -> None:
        """Emit event to all handlers registered for the value's type or a parent"""
        handlers: Set[Handler] = set()
        for cls in type(fragment.inner).__mro__:
            handlers.update(self._handlers[event_type].get(cls, ()))

        for handler in handlers:
            handler(table, fragment)

    def clear(self) -> None:
        for by_class in self._handlers.values():
            by_class.clear()


# Global registry instance
_registry = EventRegistry()


class OnDecorator:
    """Namespace for event decorators"""

    @staticmethod
    def create(*record_types: type) -> Callable[[Handler], Handler]:
        """Decorator for handlers run after a table is written"""

        def decorator(func: Handler) -> Handler:
            _registry.register("create", record_types, func)
            return func

        return decorator

    @staticmethod
    def delete(*record_types: type) -> Callable[[Handler], Handler]:
        """Decorator for handlers run after a table file is removed"""

        def decorator(func: Handler) -> Handler:
            _registry.register("delete", record_types, func)
            return func

        return decorator


# Export the decorator interface
on = OnDecorator()


# Hook into the table lifecycle
def emit_create(table: str, fragment: Fragment) -> None:
    _registry.emit("create", table, fragment)


def emit_delete(table: str, fragment: Fragment) -> None:
    _registry.emit("delete", table, fragment)


def clear_handlers() -> None:
    """Drop every registered handler."""
    _registry.clear()
