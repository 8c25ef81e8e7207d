# clipshare/adapters/outbound/persistence/__init__.py
