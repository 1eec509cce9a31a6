from contextlib import asynccontextmanager
from datetime import datetime
import uvicorn
from fastapi import FastAPI
from magento_migration.config import config
from magento_migration.routes.converter import router as converter_router
from magento_migration.utils.database import Database
from magento_migration.utils.logger import logger

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database on startup and close it on shutdown"""
    logger.info("Initializing converter service...")
    app.state.db = Database(config=config, logger=logger)
    await app.state.db.initialize()

    if not await app.state.db.health_check():
        raise RuntimeError("Database health check failed")

    if config.DEBUG_MODE:
        logger.info("Running in DEBUG mode")
    logger.info("Application startup completed successfully")

    try:
        yield
    finally:
        logger.info("Starting cleanup process...")
        await app.state.db.close()
        logger.info("Cleanup completed successfully")

app = FastAPI(
    title="Magento Converter",
    description="Converts Magento records into the target shop data model",
    docs_url=None if not config.DEBUG_MODE else "/docs",
    redoc_url=None if not config.DEBUG_MODE else "/redoc",
    lifespan=lifespan,
)
app.state.db = None

app.include_router(converter_router, prefix="/converter", tags=["Converter"])

@app.get("/", tags=["Root"])
async def root():
    """Root endpoint returning application information"""
    return {
        "app": "Magento Converter",
        "status": "running",
        "environment": 'Production' if not config.DEBUG_MODE else 'Dev',
        "timestamp": datetime.now().isoformat()
    }

@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    db_healthy = await app.state.db.health_check() if app.state.db else False

    return {
        "status": "healthy" if db_healthy else "unhealthy",
        "checks": {
            "database": "connected" if db_healthy else "disconnected",
        },
        "timestamp": datetime.now().isoformat()
    }

def run_app():
    """Run the FastAPI application"""
    uvicorn.run(
        "magento_migration.main:app",
        host=config.APP_HOST,
        port=config.APP_PORT,
        reload=config.DEBUG_MODE,
        log_level="debug" if config.DEBUG_MODE else "info"
    )

if __name__ == "__main__":
    run_app()
