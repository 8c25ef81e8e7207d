# clipshare/adapters/inbound/api/__init__.py
