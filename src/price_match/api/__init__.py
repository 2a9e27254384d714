"""HTTP API for dealer price matching."""
