# blomsterlan/__init__.py
"""
BlomsterLån: customers, loaned items, deliveries and returns, and the
balances derived from them.

The FastAPI app lives in blomsterlan.main; it is re-exported here so the
package itself can be served with uvicorn blomsterlan:app.
"""

from .main import app

__all__ = ["app"]
