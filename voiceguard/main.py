
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from voiceguard.api.routes import router as api_router
from voiceguard.config import get_cors_origins, get_elevenlabs_api_key, is_debug
from voiceguard.utils.errors import AnalysisError

logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    print("Initializing VoiceGuard API...")
    if not get_elevenlabs_api_key():
        print("ELEVENLABS_API_KEY not set; /analyze-voice will fail until it is configured.")
    yield
    print("Shutting down...")


app = FastAPI(
    title="VoiceGuard API",
    description="Detects AI-generated voices and scam call content from speech transcriptions",
    version="1.0.0",
    lifespan=lifespan,
)

origins = get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials="*" not in origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError):
    logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Body keeps the single error field; details only reach the log in dev.
    if is_debug():
        logger.warning(f"Validation failed on {request.url.path}: {jsonable_encoder(exc.errors())}")
        return JSONResponse(status_code=422, content={"error": "Request validation failed"})
    return JSONResponse(status_code=422, content={"error": "Malformed request"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Error in analysis on {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Analysis failed"})


@app.get("/health")
def health_check():
    return {"status": "ok"}


app.include_router(api_router, prefix="")


@app.get("/")
async def root():
    return {
        "message": "VoiceGuard API",
        "endpoints": ["/health", "/analyze-voice", "/analyze-voice/file", "/analyze-transcription"],
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("voiceguard.main:app", host="0.0.0.0", port=8000, reload=True)
