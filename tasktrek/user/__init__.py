"""Users: schema and profile lookups."""
