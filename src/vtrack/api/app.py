"""FastAPI application instance for the vtrack API."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..errors import VTrackError
from ..logging_utils import configure_logging
from . import __version__
from .routes import router as api_router

configure_logging()

_ERROR_STATUS = {
    "CONTENT_NOT_FOUND": 404,
    "PATH_NOT_TRACKED": 404,
    "RECORD_CORRUPT": 500,
    "REPOSITORY_NOT_LOADED": 500,
}

app = FastAPI(
    title="vtrack API",
    description="Content-addressed version tracking API",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.exception_handler(VTrackError)
async def vtrack_exception_handler(request: Request, exc: VTrackError):
    """Return the error envelope for known repository errors."""
    return JSONResponse(
        status_code=_ERROR_STATUS.get(exc.code, 400),
        content={"ok": False, "error": exc.to_dict()},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Return a consistent error envelope for uncaught exceptions."""
    return JSONResponse(
        status_code=500,
        content={
            "ok": False,
            "error": {
                "code": "INTERNAL_ERROR",
                "message": f"Internal server error: {str(exc)}",
                "details": {
                    "exception_type": type(exc).__name__,
                    "path": str(request.url.path),
                },
            },
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
