"""Core (UI-agnostic) transaction dashboard logic.

This package contains:
- the record store (JSON source -> pandas snapshot)
- filter normalization
- view compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
