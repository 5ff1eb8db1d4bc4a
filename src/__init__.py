"""Railway line consolidation pipeline."""
