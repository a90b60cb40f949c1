"""History store package.

- schema.py: Table layout, schema version, and SQL statements
- migrations.py: Upgrades for databases written by older layouts
- core.py: HistoryStore with connection and transaction management
"""

from shellrack.store.core import HistoryStore
from shellrack.store.schema import SCHEMA_VERSION

__all__ = [
    "HistoryStore",
    "SCHEMA_VERSION",
]
