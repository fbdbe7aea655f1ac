"""
Core utilities shared across the admin edge API.

This package hosts configuration, logging setup, the error taxonomy, password
and session-token helpers and the CORS middleware. Routers and services depend
on these primitives instead of reading os.environ or building error bodies
themselves.
"""
