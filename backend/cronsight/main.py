import logging

from fastapi import FastAPI

from cronsight.api import cron
from cronsight.config import log_level

logging.basicConfig(
    level=log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Cronsight API")
app.include_router(cron.router)


@app.get("/api/health")
def health():
    return {"status": "ok"}
