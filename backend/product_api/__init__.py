"""Product catalog REST API."""
