"""HTTP surface of the router."""
