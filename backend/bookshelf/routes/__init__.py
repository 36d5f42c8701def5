# Routes package init
"""
Bookshelf API: Routes Package
==============================

Route Inventory:
    - books.py:   /books CRUD (list, get, create, update, delete)
    - health.py:  GET /health

Routes are thin: they read the request, call a service, and return a model.
"""
