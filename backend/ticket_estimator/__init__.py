"""Train ticket price estimation service."""
