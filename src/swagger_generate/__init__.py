"""swagger-generate — build OpenAPI documents from route tables and validation rules."""

__version__ = "0.1.0"
