"""Output staging and finalization."""
