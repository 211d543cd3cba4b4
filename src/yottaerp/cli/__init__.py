"""CLI package for yottaerp."""
