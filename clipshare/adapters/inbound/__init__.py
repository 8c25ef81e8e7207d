# clipshare/adapters/inbound/__init__.py
