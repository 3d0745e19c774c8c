"""GitHub activity streak card generator."""
