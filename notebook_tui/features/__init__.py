"""Optional features built on top of the core."""
