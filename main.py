from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from dishka.integrations.fastapi import setup_dishka

from core.container import container
from core.exception_handler import (
    validation_exception_handler,
    http_exception_handler,
    starlette_exception_handler,
    custom_exception_handler
)
from core.exceptions import BaseCustomException
from codegen.router import router as codegen_router

VERSION = "0.1.0"

app = FastAPI(
    title="Ponder Codegen Service",
    version=VERSION,
    description="Type generation for entity schemas and contract event handlers",
)

setup_dishka(container, app)

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(StarletteHTTPException, starlette_exception_handler)
app.add_exception_handler(BaseCustomException, custom_exception_handler)
app.add_exception_handler(Exception, custom_exception_handler)

app.include_router(codegen_router)


@app.get("/")
async def root():
    """
    Root endpoint.
    
    Returns
    -------
    dict
        Application information
    """
    return {
        "name": "Ponder Codegen Service",
        "version": VERSION,
        "endpoints": {
            "entities": "/api/codegen/entities",
            "handlers": "/api/codegen/handlers",
            "docs": "/docs"
        }
    }


@app.get("/health")
async def health():
    """
    Health check endpoint.
    
    Returns
    -------
    dict
        Health status and service version
    """
    return {"status": "healthy", "version": VERSION}
