"""
Application services.

Exports: DocumentService, SearchService
"""

from course_qa.application.services.document_service import DocumentService
from course_qa.application.services.search_service import SearchService

__all__ = ["DocumentService", "SearchService"]
