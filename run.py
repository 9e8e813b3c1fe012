import uvicorn

from app.core.config import settings

if __name__ == "__main__":
    # Start Uvicorn programmatically
    print(f"🚀 Starting {settings.PROJECT_NAME} via Custom Launcher...")
    # Reload is only enabled for the dev environment
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
