"""레코드 로더 및 카탈로그"""

from .catalog import DrugCatalog
from .loader import (
    CatalogError,
    list_yaml_files,
    load_catalog,
    load_drug,
    load_drugs,
    load_meta,
    read_yaml,
    write_yaml,
)

__all__ = [
    "CatalogError",
    "DrugCatalog",
    "list_yaml_files",
    "load_catalog",
    "load_drug",
    "load_drugs",
    "load_meta",
    "read_yaml",
    "write_yaml",
]
