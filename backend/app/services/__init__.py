"""Services Layer: token authority, authorization gate, user directory, check registry.

Invariants:
    - Services only touch storage through core/repository_protocols.ResourceStore
    - Multi-record operations run as ordered single-record steps, short-circuiting
      on the first failure

Design Decisions:
    - One named service per collection instead of dispatch-by-string handler tables
"""
