"""Services Layer — dispatcher, routing table, and endpoint handlers.

Invariants:
    - Handlers grouped by resource (max ~6 endpoints each)
    - Routing uses an explicit path -> Endpoint table (no auto-discovery)

Design Decisions:
    - Shell orchestrates store IO around pure core rules (ADR: ExMA impureim sandwich)
"""
