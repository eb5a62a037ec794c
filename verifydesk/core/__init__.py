"""
Core building blocks shared by the server.

Subpackages:
    database: SQLModel entities, repositories and session management.
    models: Domain enums and API I/O view models.

Modules:
    errors: Domain exception hierarchy.
    logging_config: Centralized logging setup.
"""
