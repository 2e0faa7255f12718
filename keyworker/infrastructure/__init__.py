"""Infrastructure layer - adapters behind the application ports."""
