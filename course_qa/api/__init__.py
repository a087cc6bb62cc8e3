"""HTTP API: routers, dependency wiring and error translation."""
