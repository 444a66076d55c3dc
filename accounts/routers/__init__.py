"""
FastAPI routers for the accounts service.

Each module exposes an APIRouter included by accounts.app.create_app().
"""
