"""Application-wide constants."""

PROJECT_NAME = "VerifyDesk"
API_V1_STR = "/api/v1"
API_VERSION = "1.0.0"
# Alembic head revision
SCHEMA_VERSION = "20261019_000000"
