"""Blog API.

REST API exposing Users and their Posts over a relational database, with
declarative request validation and a single error-to-HTTP mapper.
"""

__version__ = "0.1.0"
