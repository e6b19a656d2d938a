"""
Core engine module.

Exports:
- Component, register_component: Component base and registration
- EventBus, Event: Event system
"""

from higher_engine.core.component import (
    Component,
    register_component,
    get_component_type,
    get_all_component_types,
)
from higher_engine.core.events import EventBus, Event, EventHandler

__all__ = [
    # Components
    "Component",
    "register_component",
    "get_component_type",
    "get_all_component_types",
    # Events
    "EventBus",
    "Event",
    "EventHandler",
]
