"""Brand guidelines API: client records, document imports, and versions."""
