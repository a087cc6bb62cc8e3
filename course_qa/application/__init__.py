"""Application layer: services orchestrating core logic and boundary adapters."""
