"""Infrastructure Layer — storage, session, network and process-local state.

Invariants:
    - Infrastructure implements the Protocols declared in core/repository_protocols.py
    - All external calls bounded by timeouts; failures mapped or swallowed per contract

Design Decisions:
    - One adapter per concern (ADR: ExMA single responsibility)
"""
