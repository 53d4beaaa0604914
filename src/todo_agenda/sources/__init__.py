"""Reading and parsing of plain-text task sources."""
