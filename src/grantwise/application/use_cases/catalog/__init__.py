"""Permission and role catalog use cases."""
