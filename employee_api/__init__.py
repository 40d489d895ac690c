"""CRUD HTTP API for employee records on MySQL/TiDB or PostgreSQL."""
