"""Course materials Q&A service: ingestion, vector retrieval and cited answers."""
