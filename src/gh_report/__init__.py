"""GitHub activity analysis and reporting."""
