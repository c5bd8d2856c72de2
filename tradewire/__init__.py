"""
tradewire — wire/runtime data model for trading domain entities.

Wire form: JSON-safe dicts with lowerCamelCase keys and epoch-millisecond
timestamps. Runtime form: frozen pydantic models with aware datetimes.
"""

__version__ = "0.3.0"
