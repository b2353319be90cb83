"""HTTP API helpers for Recipe Finder Core."""
