"""Service Layer - imperative shell around the pure core.

Invariants:
    - Services load snapshots, call core functions, and persist the outcome
    - Services never commit on behalf of a failed core check
"""
