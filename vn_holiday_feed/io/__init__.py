"""Output writers for finalized holiday records."""
