# substrate_indexer/database/__init__.py

from .interfaces import EntityStore
from .memory_store import MemoryEntityStore, DuplicateRecordError
from .connection import DatabaseManager
from .entity_store import SqlEntityStore
