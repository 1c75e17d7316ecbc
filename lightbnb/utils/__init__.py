"""
Utility modules for the LightBnB data-access layer.
"""

from .exceptions import (
    DataAccessError,
    QueryExecutionError,
)
from .query_builder import (
    CompiledQuery,
    build_property_search,
    compile_query,
)

__all__ = [
    # Exceptions
    "DataAccessError",
    "QueryExecutionError",

    # Query building
    "CompiledQuery",
    "build_property_search",
    "compile_query",
]
