"""Core layer: domain model, scoring and report generation, services."""
