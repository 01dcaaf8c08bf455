"""Pump Master FastAPI application package."""
