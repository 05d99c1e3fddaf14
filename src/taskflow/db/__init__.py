"""Database plumbing: metadata, engine and seeding."""
