from .backend_catalog import BackendCatalog

__all__ = ["BackendCatalog"]
