"""HTTP API for the connection settings codec."""
