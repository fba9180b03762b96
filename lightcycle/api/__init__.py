"""REST host: background match manager and FastAPI routes."""
