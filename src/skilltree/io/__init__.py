"""Reading and writing skill tree files."""
