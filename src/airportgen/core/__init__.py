"""Core infrastructure shared by the generator."""
