"""Domain services: merging, toggling, persistence, and search state."""
