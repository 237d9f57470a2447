"""Application layer: media persistence, orphan cleanup, upload ingestion."""
