"""PostgreSQL grant store."""
