# Path: tests/__init__.py
