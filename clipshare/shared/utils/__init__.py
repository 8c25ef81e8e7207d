# clipshare/shared/utils/__init__.py
