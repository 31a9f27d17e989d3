"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Legacy endpoints answer in the format chosen by the path suffix

Design Decisions:
    - Thin routes delegate to the dispatcher (ADR: ExMA impureim sandwich)
"""
