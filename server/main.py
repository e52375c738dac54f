from typing import Any, Mapping
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from server.routes import router
from server.routes.prometheus import metrics_middleware

# =========================================================
# FASTAPI APP
# =========================================================

app = FastAPI(title="Reminder Notifier API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],      # IMPORTANT – allows OPTIONS
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

# Register Prometheus middleware
app.middleware("http")(metrics_middleware)

# Include API Router
app.include_router(router)


@app.get("/health")
async def health() -> Mapping[str, Any]:
    return {"status": "ok"}
