"""
Higher engine - infrastructure shared by the battle framework.

Provides:
- Component base class (pydantic data containers)
- Typed event bus
- Static game data database
"""
