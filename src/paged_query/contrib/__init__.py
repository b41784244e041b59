"""Optional integrations (SQLAlchemy, FastAPI)."""
