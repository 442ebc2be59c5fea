"""Static engineering knowledge (tabulated standards data)."""
