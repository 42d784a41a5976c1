"""
Tests for the FranchiseNexus backend

Tests are organized by layer:
- test_token_service.py / test_password_hash.py: credential primitives
- test_roles.py / test_workflow.py: access control table and status rules
- test_repositories.py / test_services.py: persistence and use cases on in-memory SQLite
- test_api.py: HTTP surface through FastAPI's TestClient
- test_manage_users.py: admin CLI
"""
