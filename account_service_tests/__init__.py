"""
account_service_tests package

Tests for the account service:

- HTTP flows through FastAPI's TestClient (`test_auth.py`, `test_profile.py`)
- Password hashing and JWT handling (`test_password_hashing.py`, `test_tokens.py`)
- Account orchestration against a real SQLite store (`test_account_service.py`)
- Request schema constraints (`test_schemas.py`)
"""
