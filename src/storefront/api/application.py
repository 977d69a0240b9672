"""Application factory: routers, error handlers and static uploads around a domain."""

from uuid import uuid4

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from storefront.api.errors import register_exception_handlers
from storefront.api.health import health_router
from storefront.catalogue.api.routes import brand_router, product_router
from storefront.catalogue.api.uploads import PUBLIC_PREFIX, upload_dir
from storefront.identity.api.routes import user_router
from storefront.ordering.api.routes import order_router
from storefront.utils.logging import add_context, clear_context


def create_app(domain) -> FastAPI:
    """Build the application around an initialized ``domain``."""
    app = FastAPI(
        title="Storefront API",
        description="Products, brands, users and orders",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the Protean domain context for each request and tag its log records."""
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        clear_context()
        add_context(request_id=request_id, method=request.method, path=request.url.path)
        try:
            with domain.domain_context():
                response = await call_next(request)
        finally:
            clear_context()
        response.headers["X-Request-ID"] = request_id
        return response

    api = APIRouter(prefix="/api")
    api.include_router(health_router)
    api.include_router(user_router)
    api.include_router(product_router)
    api.include_router(brand_router)
    api.include_router(order_router)
    app.include_router(api)

    register_exception_handlers(app)

    uploads = upload_dir()
    uploads.mkdir(parents=True, exist_ok=True)
    app.mount(PUBLIC_PREFIX, StaticFiles(directory=uploads), name="uploads")

    return app
