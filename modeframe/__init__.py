"""Layered mode server with actors and components, plus a JSON writer."""

__version__ = "0.1.0"
__all__ = ["actor", "component", "escape", "mode", "output", "serializer", "server"]