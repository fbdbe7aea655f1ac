"""
FastAPI routers, one per edge function family (settings, transactions,
support, cards, system, auth).

Each module exposes an APIRouter included by edge_api.app.create_app.
"""
