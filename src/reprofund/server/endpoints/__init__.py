"""REST endpoint modules, one per entity kind."""
