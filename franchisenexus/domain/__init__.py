"""
Domain layer - roles, access rules, errors and the application workflow.

No HTTP concerns live here; the unit of work is the only seam to persistence.
"""
