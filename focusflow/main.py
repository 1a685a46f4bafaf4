from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from focusflow.api.routers.analytics import router as analytics_router
from focusflow.api.routers.billing import router as billing_router
from focusflow.api.routers.insights import router as insights_router
from focusflow.api.routers.me import router as me_router
from focusflow.api.routers.sessions import router as sessions_router
from focusflow.api.routers.timer import router as timer_router
from focusflow.shared.config import get_settings


settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = FastAPI(title="FocusFlow API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(billing_router)
app.include_router(me_router)
app.include_router(sessions_router)
app.include_router(analytics_router)
app.include_router(timer_router)
app.include_router(insights_router)


@app.get("/health")
def health():
    return {"status": "ok"}
