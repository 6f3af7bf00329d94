"""HTTP routers for the Explorer API."""
