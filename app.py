# app.py
"""
Entrypoint for the BlomsterLån loan API.

Run the server from the project root:
    uvicorn app:app --reload

The database location comes from BLOMSTERLAN_DATABASE_URL.
"""

from blomsterlan.main import app  # re-export FastAPI instance
