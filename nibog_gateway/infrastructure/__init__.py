"""Infrastructure adapters: HTTP clients and stores."""
