# clipshare/application/ports/__init__.py
