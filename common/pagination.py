"""
Pagination utilities for the project.

Defines a default page number pagination class used across DRF
endpoints.  The page size is controlled centrally here rather than
duplicated throughout the codebase; clients may ask for a smaller or
larger page via ``?page_size=``.
"""
from rest_framework.pagination import PageNumberPagination

class DefaultPagination(PageNumberPagination):
    """A simple page number paginator with a default page size."""
    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100
