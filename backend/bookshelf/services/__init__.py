# Services package init
"""
Bookshelf API: Services Layer
==============================

Service Inventory:
    - LogSink: best-effort appends of request log lines (directory ensure + O_APPEND write)
    - BookService: in-memory book collection with duplicate and not-found rules
"""
