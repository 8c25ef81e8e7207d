# clipshare/adapters/__init__.py
