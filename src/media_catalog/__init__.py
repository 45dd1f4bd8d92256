"""Media catalog package: classification, root registry, scanning and the catalog."""

from .catalog import MediaCatalog
from .classifier import Category, classify, classify_path, extension_of, predicate_for
from .errors import CatalogError, CategoryNotSelectedError, ScanCancelledError
from .roots import StorageClass, StorageRoots
from .scanner import CancelToken, CatalogScanner, ScanConfig
from .schema import CatalogSummary, ScanReport

__all__ = [
    "MediaCatalog",
    "Category",
    "classify",
    "classify_path",
    "extension_of",
    "predicate_for",
    "CatalogError",
    "CategoryNotSelectedError",
    "ScanCancelledError",
    "StorageClass",
    "StorageRoots",
    "CancelToken",
    "CatalogScanner",
    "ScanConfig",
    "CatalogSummary",
    "ScanReport",
]
