"""
RAG Chat Relay - FastAPI application that proxies chat to an LLM provider.
Optionally augments prompts with documents from a vector-similarity search and streams the answer back.
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from config import Config
from routes import chat_message, chat_stream, openai_proxy, analysis
from utils.http_client import HTTPClientManager
from utils.logger import app_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    yield
    await HTTPClientManager.close_all()

app = FastAPI(title=Config.APP_TITLE, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Turn body validation errors into a single readable message."""
    errors = exc.errors()
    app_logger.error(f"Validation error for {request.url}: {errors}")

    if errors:
        first_error = errors[0]
        error_type = first_error.get('type', '')
        loc = first_error.get('loc') or []
        field = loc[-1] if loc else 'body'

        if error_type == 'json_invalid':
            message = "Request body is not valid JSON"
        else:
            message = f"{field}: {first_error.get('msg', 'Validation error')}"

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "detail": [{
                    "msg": message,
                    "type": error_type,
                    "loc": list(loc)
                }]
            },
        )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": errors},
    )


#root endpoint
@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {"message": "RAG Chat Relay is running"}

app.include_router(chat_message.router, tags=["chat"])
app.include_router(chat_stream.router, tags=["chat"])
app.include_router(openai_proxy.router, tags=["proxy"])
app.include_router(analysis.router, tags=["analysis"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
