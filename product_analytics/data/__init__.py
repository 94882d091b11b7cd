"""
Product Table Module
"""
from .tables import PRODUCT_ID, TABLE_SCHEMAS, ProductTables, TableName

__all__ = [
    "PRODUCT_ID",
    "TABLE_SCHEMAS",
    "ProductTables",
    "TableName",
]
