"""FastAPI exception handlers."""
