"""Generate typed GraphQL query and projection classes from a schema."""

__version__ = "0.1.0"
