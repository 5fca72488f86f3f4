"""FastAPI application and its wiring."""
