"""REST API over the paperlink orchestrator."""
