"""User records service.

This package contains the user domain model, the storage adapters that keep
user records in a key-value store, the business-rule service layer and the
HTTP transport built on top of it.
"""

__version__ = "0.1.0"
