# clipshare/application/dtos/__init__.py
