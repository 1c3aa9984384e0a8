"""CATMAT Preços: CATMAT catalog lookup and compras.gov.br price research proxy."""

__version__ = "1.0.0"
