"""Configuration package for shellrack."""
