"""Domain enums, transition tables and the permission catalogue."""
