# clipshare/shared/__init__.py
