"""Tasks: schema for task documents."""
