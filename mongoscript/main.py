from fastapi import FastAPI

from .config import get_settings
from .database import init_database
from .logging_config import logger
from .routes import router

app = FastAPI(title="mongoscript")


@app.on_event("startup")
async def startup_event():
    try:
        init_database(get_settings())
    except Exception as e:
        logger.warning(f"Database initialization failed at startup: {e}")


app.include_router(router)
