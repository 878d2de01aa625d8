"""Core Layer — domain rules with no IO, no DB, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Rule functions are pure and deterministic; IO reaches core only through repository_protocols

Design Decisions:
    - Functional core separated from imperative shell: services resolve facts, core decides
"""
