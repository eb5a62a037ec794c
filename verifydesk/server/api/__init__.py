"""HTTP API of the VerifyDesk server."""
