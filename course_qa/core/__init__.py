"""Core business logic: ingestion pipeline, retrieval and answer composition."""
