"""Streamlit interface adapters."""

__all__: list[str] = []
