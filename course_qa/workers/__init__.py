"""
Background workers.

Exports: IngestionQueue
"""

from course_qa.workers.ingestion_queue import IngestionQueue

__all__ = ["IngestionQueue"]
