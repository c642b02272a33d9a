"""
HTTP API package.

The versioned router is mounted by the application factory:

    from app.api.v1.router import router
    app.include_router(router, prefix=settings.API_PREFIX)
"""
