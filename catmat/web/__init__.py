"""HTTP interface for CATMAT Preços (FastAPI)."""
