from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import time
from src.api.routes import router
from src.core.config import settings
from src.core.logging import logger
from src.db.indexes import create_indexes

app = FastAPI(title="Security Issues")

@app.middleware("http")
async def timeout_middleware(request: Request, call_next):
    if request.url.path.endswith("/analytics"):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        if process_time > settings.ANALYTICS_TIME_LIMIT_SECONDS:
            logger.warning(f"Analytics took {process_time:.2f}s for {request.url.query!r}")
            return JSONResponse(
                status_code=504,
                content={"detail": "Performance Limit Exceeded: Aggregation took too long"}
            )
        return response
    return await call_next(request)

@app.on_event("startup")
async def startup_event():
    await create_indexes()

app.include_router(router)
