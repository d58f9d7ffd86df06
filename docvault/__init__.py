"""DocVault: owner-linked PDF document ingestion service."""

__version__ = "1.0.0"
