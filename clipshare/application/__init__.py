# clipshare/application/__init__.py
