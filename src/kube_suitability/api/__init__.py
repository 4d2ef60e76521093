"""HTTP API layer: FastAPI routes and pydantic schemas."""
