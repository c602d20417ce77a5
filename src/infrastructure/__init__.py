"""Infrastructure layer: concrete resource stores and their wiring into FastAPI."""
