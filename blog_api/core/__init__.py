"""Core domain rules: error taxonomy, request validation and services."""
