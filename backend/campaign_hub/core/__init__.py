"""Core Layer - pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic
    - Inputs are immutable snapshots; nothing in core/ mutates its arguments

Design Decisions:
    - Functional core separated from imperative shell: the shell loads snapshots,
      the core decides eligibility and budget visibility
"""
