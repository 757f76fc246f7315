"""Grant manager use cases - create and remove grants."""
