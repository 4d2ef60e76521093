"""Adapters layer: database engine and SQLAlchemy repositories."""
