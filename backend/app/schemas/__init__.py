"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate shape at the system boundary (types, id lengths)
    - Value rules (enums, ranges, non-blank) live in core/enforce_*.py so direct
      service callers get the same checks

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
