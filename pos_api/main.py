# Main application file



import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from pos_api.database import engine, Base
from pos_api.core.rate_limiter import limiter
from pos_api.core.config import settings
from pos_api.models import categories as _categories, products as _products  # noqa: F401
from pos_api.models import sales as _sales, sale_items as _sale_items  # noqa: F401
from pos_api.routers import (
    categories,
    products,
    sales,
)


# LOGGING CONFIGURATION

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("pos_api")


# DATABASE

# Development only, Alembic manages the schema elsewhere
if settings.ENV == "development":
    Base.metadata.create_all(bind=engine)


# APP INIT

app = FastAPI(
    title="POS Backend API",
    description="Point-of-sale backend: products, categories and sales with stock tracking",
    version="1.0.0",
)



# CORS

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Content-Type"],
)


# RATE LIMITING

app.state.limiter = limiter
app.add_exception_handler(
    RateLimitExceeded,
    _rate_limit_exceeded_handler
)


# REQUEST LOGGING MIDDLEWARE

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    duration = round((time.time() - start_time) * 1000, 2)

    logger.info(
        f"{request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Time: {duration}ms"
    )

    return response


# ROUTERS

app.include_router(categories.router)
app.include_router(products.router)
app.include_router(sales.router)



# ROOT

@app.get("/")
def root():
    logger.info("Health check endpoint called")
    return {"message": "POS Backend API is running"}
