"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input)
    - Input filters mirror what the index endpoint has always accepted

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
