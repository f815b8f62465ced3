"""HTTP API for Bettercover."""
