"""External integrations (compras.gov.br price research API)."""
