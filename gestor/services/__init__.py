"""Storage and business summaries."""
