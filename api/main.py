# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-02-09
# Description: main.py
# -----------------------------------------------------------------------------
import logging

from fastapi import FastAPI

from api.routers import ask, corpus_stats, health, query

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",)
app = FastAPI(title="corpus-qa API")
app.include_router(health.router)
app.include_router(query.router)
app.include_router(ask.router)
app.include_router(corpus_stats.router)


if __name__ == "__main__":
    import os
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=os.getenv("CQA_API_HOST", "127.0.0.1"),
        port=int(os.getenv("CQA_API_PORT", "8000")),
        log_level="info",
        reload=False,
    )
