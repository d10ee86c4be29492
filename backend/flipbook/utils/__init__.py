# backend/flipbook/utils/__init__.py
