"""HTTP clients for the catalog and the save store."""
from retrohost.client.catalog_client import CatalogClient
from retrohost.client.save_client import HttpSaveStore

__all__ = ["CatalogClient", "HttpSaveStore"]
