"""Core Layer — pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure; randomness is the only nondeterminism
      (random_tokens, escrow)

Design Decisions:
    - Functional core separated from imperative shell
"""
