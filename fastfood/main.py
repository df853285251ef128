import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from fastfood.api import meal_routes, menu_routes, order_routes, restaurant_routes, user_routes
from fastfood.core.config import settings
from fastfood.core.errors import OrderingError
from fastfood.db import create_db_and_tables
import fastfood.models  # registers all models via models/__init__.py

log = logging.getLogger(__name__)

app = FastAPI()


# Swagger Bearer token support for "Authorize" button
def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="FastFood API",
        version="1.0.0",
        description="Restaurant menus, pickup orders and order tracking.",
        routes=app.routes,
    )
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT"
        }
    }
    for path in openapi_schema["paths"].values():
        for operation in path.values():
            operation["security"] = [{"BearerAuth": []}]
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(OrderingError)
async def ordering_error_handler(request: Request, exc: OrderingError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Invalid request",
            "code": "INVALID_REQUEST",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    route = request.scope.get("route")
    tag = f"{route.name.upper()}_ERROR" if route is not None else "DATABASE_ERROR"
    log.error("%s %s %s", tag, request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Server error"})


@app.on_event("startup")
async def on_startup():
    log.info("Starting DB setup...")
    await create_db_and_tables()
    log.info("DB schema created.")


# menu routes first, they share the /restaurants prefix
app.include_router(menu_routes.router)
app.include_router(restaurant_routes.router)
app.include_router(meal_routes.router)
app.include_router(order_routes.router)
app.include_router(user_routes.router)
