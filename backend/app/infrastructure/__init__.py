"""Infrastructure Layer: storage, hashing and cross-cutting concerns.

Invariants:
    - Infrastructure never imports services/ or api/
    - All backend failures mapped to core/errors.py types before leaving this layer

Design Decisions:
    - Thin adapters implementing core/repository_protocols.py
"""
