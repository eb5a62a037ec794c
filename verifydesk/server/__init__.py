"""
VerifyDesk Server Package.

This package contains the web server implementation for VerifyDesk.
It includes the API definition, configuration, exception handlers and the
service layer.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration and constants.
    exception_handlers: Mapping of domain and unexpected errors to HTTP responses.
    services: Business logic and service layer.
"""
