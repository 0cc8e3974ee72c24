"""Errors raised by the outer layer (manifest loading, file output).

The schema and inference core never raises; these cover the I/O around it.
"""


class SwaggerGenerateError(Exception):
    """Base class for all swagger-generate errors."""


class ManifestError(SwaggerGenerateError):
    """The route manifest is missing, unreadable, or malformed."""


class OutputError(SwaggerGenerateError):
    """Generated files could not be written."""
