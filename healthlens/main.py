# /healthlens/main.py

import os
import time
import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from healthlens.config.settings import settings
from healthlens.utils.lifecycle import lifespan
from healthlens.utils.metrics import response_time_histogram
from healthlens.routes import flows, public

app = FastAPI(
    title="HealthLens Flow Service",
    version=public.SERVICE_VERSION,
    description="Typed AI health flows with safety checks and guaranteed disclaimers",
    lifespan=lifespan,
    openapi_url=f"/api/{settings.api_version}/openapi.json" if settings.environment != "production" else None,
    docs_url=f"/api/{settings.api_version}/docs" if settings.environment != "production" else None,
    redoc_url=f"/api/{settings.api_version}/redoc" if settings.environment != "production" else None,
)

# --- Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def performance_middleware(request: Request, call_next):
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(method=request.method, path=request.url.path)
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    # Label by route template so /flows/{flow_name} stays one series
    route = request.scope.get("route")
    endpoint = getattr(route, "path", None) or request.url.path
    response_time_histogram.labels(endpoint=endpoint).observe(process_time)
    response.headers["X-Process-Time"] = str(process_time)
    return response


# --- API Routers ---
app.include_router(public.router)
app.include_router(flows.router, prefix=f"/api/{settings.api_version}")

# --- Main Entry Point for Uvicorn (for local development) ---
if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))
    host = os.getenv("HOST", "127.0.0.1")

    uvicorn.run(
        "healthlens.main:app",
        host=host,
        port=port,
        reload=settings.environment == "development",
        workers=settings.workers if settings.environment == "production" else 1,
    )
