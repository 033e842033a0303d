import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from dictations.config import get_settings
from dictations.errors import DictationError
from dictations.routers import dictations
from dictations.services.ingestion import IngestionService
from dictations.services.llm import LLMService
from dictations.services.retrieval import RetrievalService
from dictations.services.store import KeyValueStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- Startup ---
    logger.info("Starting services...")
    settings = get_settings()

    llm = LLMService(settings)
    store = KeyValueStore(settings)

    await llm.start()
    logger.info("LLM client ready (model: %s)", settings.llm_model)

    await store.start()
    logger.info("Store ready")

    app.state.ingestion = IngestionService(llm, store, settings=settings)
    app.state.retrieval = RetrievalService(store, settings=settings)

    logger.info("All services started. API is ready.")
    yield

    # --- Shutdown ---
    logger.info("Shutting down services...")
    await store.stop()
    await llm.stop()
    logger.info("All services stopped.")


app = FastAPI(
    title="Dictations",
    description="Classify short dictations and list them per user",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(DictationError)
async def dictation_error_handler(request: Request, exc: DictationError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return PlainTextResponse(exc.public_message, status_code=exc.status_code)


@app.get("/health")
async def health():
    return {"status": "ok"}


# Catch-all paths; keep last.
app.include_router(dictations.router)
