# clipshare/adapters/configuration/__init__.py
