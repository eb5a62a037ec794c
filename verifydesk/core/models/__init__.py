"""
Models that are not database tables.

- domain: enums shared by entities, services and the API
- io: Pydantic request/response view models
"""
