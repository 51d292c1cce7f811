"""Event system for clipsplit.

This module lets the state store announce committed transitions to
listeners such as the persistence adapter without depending on them.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable, Dict, Set

logger = logging.getLogger(__name__)

class EventType(Enum):
    """Store event types."""
    SOURCE_CHANGED = auto()
    STATE_COMMITTED = auto()
    STATE_CLEARED = auto()

@dataclass
class Event:
    """Event data container.
    
    Attributes:
        type: Type of event
        timestamp: When the event occurred
        data: Event-specific data
        source: Component that generated the event
    """
    type: EventType
    timestamp: datetime
    data: Dict[str, Any]
    source: str

class EventEmitter:
    """Base event system for component communication."""
    
    def __init__(self) -> None:
        """Initialize event emitter."""
        self._handlers: Dict[EventType, Set[Callable[[Event], None]]] = {}
        self._error_handlers: Set[Callable[[Exception], None]] = set()
    
    def on(self, event_type: EventType, handler: Callable[[Event], None]) -> None:
        """Register an event handler.
        
        Args:
            event_type: Type of event to handle
            handler: Callback function for the event
        """
        if event_type not in self._handlers:
            self._handlers[event_type] = set()
        self._handlers[event_type].add(handler)
    
    def off(self, event_type: EventType, handler: Callable[[Event], None]) -> None:
        """Remove an event handler."""
        if event_type in self._handlers:
            self._handlers[event_type].discard(handler)
            if not self._handlers[event_type]:
                del self._handlers[event_type]
    
    def on_error(self, handler: Callable[[Exception], None]) -> None:
        """Register an error handler."""
        self._error_handlers.add(handler)
    
    def off_error(self, handler: Callable[[Exception], None]) -> None:
        """Remove an error handler."""
        self._error_handlers.discard(handler)
    
    def emit(self, event_type: EventType, data: Dict[str, Any], source: str) -> None:
        """Emit an event to registered handlers.

        A failing handler never stops the others or reaches the caller.
        
        Args:
            event_type: Type of event to emit
            data: Event data
            source: Component emitting the event
        """
        event = Event(
            type=event_type,
            timestamp=datetime.now(),
            data=data,
            source=source
        )
        
        for handler in list(self._handlers.get(event_type, ())):
            try:
                handler(event)
            except Exception as e:
                self._handle_error(e)
    
    def _handle_error(self, error: Exception) -> None:
        """Route a handler failure to the error handlers, or log it."""
        if not self._error_handlers:
            logger.error("Event handler failed: %s", error)
            return
        for handler in list(self._error_handlers):
            try:
                handler(error)
            except Exception as e:
                logger.error("Error handler failed: %s", e)
