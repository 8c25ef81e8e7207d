# clipshare/adapters/outbound/__init__.py
