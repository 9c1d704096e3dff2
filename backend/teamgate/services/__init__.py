"""Services Layer — IO collaborators, orchestrators and action dispatch.

Invariants:
    - Each collaborator owns one table family (configuration, teams, tokens, logos, sessions)
    - Orchestrators depend on core Protocols, not on concrete collaborators
    - Action dispatch uses explicit dict mapping (no auto-discovery)
"""
