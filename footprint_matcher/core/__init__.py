"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants (default dataset, region, search radius)
- exceptions: Custom exception hierarchy
- ingress: Query payload normalisation at the geocoding boundary
"""
