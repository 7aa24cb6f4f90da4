"""
Infrastructure Package
======================

Storage and credential adapters behind the interfaces the marketplace services depend on.

Modules:
    - persistence: Repository interfaces with in-memory and DynamoDB backends
    - security: Password hashing and access token issuing
    - container: Per-process wiring of repositories and services

Services only import the interfaces, so the same code runs against either
storage backend and tests run against the in-memory one.
"""
