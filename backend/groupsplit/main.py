import logging
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from groupsplit.api.balances import router as balances_router
from groupsplit.api.currency import router as currency_router
from groupsplit.api.expenses import router as expenses_router
from groupsplit.core.config import settings
from groupsplit.core.log import configure_logging

configure_logging()
logger = logging.getLogger("groupsplit.timing")

app = FastAPI(title="GroupSplit API", version="0.1.0")

cors_origins = settings.cors_origins.split(",")


class TimingMiddleware:
    """Lightweight ASGI middleware that logs method, path, status and duration."""
    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        t0 = time.perf_counter()
        status_code = 0

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        await self.app(scope, receive, send_wrapper)
        ms = int((time.perf_counter() - t0) * 1000)
        method = scope.get("method", "?")
        path = scope.get("path", "?")
        logger.info(f"{method} {path} -> {status_code} in {ms}ms")


app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(expenses_router)
app.include_router(balances_router)
app.include_router(currency_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
