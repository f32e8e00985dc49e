"""Emergency-dispatch feed ingestion and classification."""
