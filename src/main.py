"""FastAPI application for compiling UI tree documents.

Run locally with ``uitree-serve`` (or ``uvicorn src.main:app``).
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables before the service reads its configuration
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

from src.generator.registries.platforms import PLATFORMS  # noqa: E402
from src.routes import compilation  # noqa: E402
from src.service import compile_service  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the compiler configuration on startup."""
    logger.info("Starting UI Tree Compiler Service...")
    logger.info(f"Targets: {', '.join(p.value for p in PLATFORMS)}")
    logger.info(f"Output directory: {compile_service.OUTPUT_DIR}")
    logger.info(f"Default platform: {compile_service.DEFAULT_PLATFORM}")
    logger.info(f"Component workers: {compile_service.MAX_WORKERS}")
    yield
    logger.info("Shutting down UI Tree Compiler Service...")


app = FastAPI(
    title="UI Tree Compiler",
    description="Compiles declarative UI tree documents to component source",
    version="0.1.0",
    lifespan=lifespan,
)

cors_origins = os.getenv("CORS_ORIGINS", "*").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(compilation.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


def main():
    """Run the API server."""
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
    )


if __name__ == "__main__":
    main()
