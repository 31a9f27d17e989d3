"""Pydantic Schemas — validation of the non-legacy request/response contracts.

Invariants:
    - Schemas validate at system boundary (headers, health responses)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
