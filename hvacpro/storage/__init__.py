from hvacpro.storage.base import Storage, ContractorQuery, CONTRACTOR_SORT_FIELDS
from hvacpro.storage.database import DatabaseStorage
from hvacpro.storage.memory import MemStorage

__all__ = [
    "Storage",
    "ContractorQuery",
    "CONTRACTOR_SORT_FIELDS",
    "DatabaseStorage",
    "MemStorage",
]
