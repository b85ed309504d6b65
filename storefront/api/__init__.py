# storefront/api/__init__.py
from contextlib import asynccontextmanager

from fastapi import FastAPI

from storefront.api.routers import (
    admin,
    auth,
    cart,
    chat,
    health,
    online,
    orders,
    products,
    reviews,
    saved,
    theme,
    upload,
    users,
)
from storefront.data.bootstrap import init_db
from storefront.utils.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront",
        version="1.0.0",
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(admin.router)
    app.include_router(products.router)
    app.include_router(cart.router)
    app.include_router(orders.router)
    app.include_router(reviews.router)
    app.include_router(saved.router)
    app.include_router(chat.router)
    app.include_router(theme.router)
    app.include_router(online.router)
    app.include_router(upload.router)

    return app
