"""Recipe Finder Core - session-based authentication API and client shell."""

__version__ = "0.1.0"
