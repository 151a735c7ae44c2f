# camera/__init__.py
