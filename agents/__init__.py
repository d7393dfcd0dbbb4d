"""Generation pipeline: provider clients, extraction, normalization, enrichment, orchestration."""
