"""
account_service package

Core backend logic for the account/authentication service:

- FastAPI application factory (`main.py`)
- SQLAlchemy model, database integration and store adapter (`models.py`, `db.py`, `store.py`)
- Password hashing and JWT issuing/verification (`auth.py`)
- Account orchestration (`services.py`)
- Pydantic schemas (`schemas.py`)
"""
