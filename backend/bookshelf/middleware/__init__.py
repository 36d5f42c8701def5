# Middleware package init
"""
Bookshelf API: Middleware Package
==================================

Middleware Chain:
    Request → [Request Logger] → [ServerError (Starlette)] → [ExceptionMiddleware] → Route Handler

    The request logger wraps the whole stack built by Starlette (see
    BookshelfAPI in main.py), so it sees every request that reaches the
    application and every response actually sent, including the ones the
    catch-all exception handler produces in ServerErrorMiddleware.
"""
