"""Infrastructure adapters: database, repositories and HTTP clients."""
