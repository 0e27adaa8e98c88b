# Boltic Databases SDK
# File: resources/__init__.py
# Version: v1

"""Resource classes grouped by API area."""

from .base import BaseResource
from .columns import ColumnResource
from .databases import DatabaseResource
from .indexes import IndexResource
from .records import RecordResource
from .sql import SqlResource, collect_chunks
from .tables import TableResource

__all__ = [
    "BaseResource",
    "ColumnResource",
    "DatabaseResource",
    "IndexResource",
    "RecordResource",
    "SqlResource",
    "TableResource",
    "collect_chunks",
]
