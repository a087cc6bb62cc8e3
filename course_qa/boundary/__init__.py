"""Boundary adapters: database, vector index, embeddings and document storage."""
