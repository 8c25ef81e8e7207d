# clipshare/domain/__init__.py
