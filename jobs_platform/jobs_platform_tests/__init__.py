"""
account_service package tests

Covers the account service of the jobs platform:

- FastAPI application and HTTP surface (`main.py`, `routes/`)
- Credential store and audit trail (`db.py`, `models.py`, `utils/event_logger.py`)
- Password hashing and token signing (`auth.py`)
- Signup, login and token verification (`service.py`)
"""
