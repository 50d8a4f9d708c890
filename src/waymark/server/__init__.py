"""Transport adapters that drive a Router from a server."""
