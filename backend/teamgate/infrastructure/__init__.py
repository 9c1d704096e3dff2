"""Infrastructure Layer — database session management and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ domain logic except the error hierarchy
    - All driver exceptions mapped to DatabaseError before leaving this layer
"""
