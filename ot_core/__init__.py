"""Core (UI-agnostic) overtime dashboard logic.

This package contains:
- source loading (CSV -> raw rows -> immutable records)
- time/duration parsing and shift classification
- filter normalization and record filtering
- grouping/aggregation and headline insights
- page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
