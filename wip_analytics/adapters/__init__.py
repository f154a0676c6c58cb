"""Adapters wiring use cases to the outside world."""
