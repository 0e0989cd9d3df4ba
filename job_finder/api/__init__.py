"""HTTP API for the job finder."""
