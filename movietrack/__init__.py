"""MovieTrack: catalog search with locally persisted favorites."""
