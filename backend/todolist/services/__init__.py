"""Services Layer — access authority, sharing policy, title disambiguation and request handlers.

Invariants:
    - Every handler flows resolve -> validate -> mutate -> commit, in that order
    - Handlers split by aggregate (task lists, tasks, tags, comments, sharing, users)

Design Decisions:
    - Services await repositories and hand resolved facts to pure core rules
    - One handler file per aggregate for locality (no god objects)
"""
