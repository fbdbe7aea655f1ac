"""
Use cases behind the admin edge functions.

Each service orchestrates SQLRepository calls, validates input and raises the
errors from edge_api.core.errors. Routers call these services instead of
touching the store directly.
"""
