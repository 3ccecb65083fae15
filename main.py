import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from logging_config import configure_logging
from api.admin import router as admin_router
from api.options import router as options_router
from api.wizard import router as wizard_router
from services.api_client import CadastroApiClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    app.state.api_client = CadastroApiClient()
    logger.info("Forwarding cadastros requests to %s", settings.api_root)
    try:
        yield
    finally:
        await app.state.api_client.aclose()


app = FastAPI(
    title=settings.app_name,
    description="Loan application intake wizard and back-office review",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(options_router)
app.include_router(wizard_router)
app.include_router(admin_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
