from fastapi import FastAPI, HTTPException, Depends, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Optional
import logging

from string_analyzer import __version__, config, crud, schemas
from string_analyzer.errors import (
    DuplicateRecord,
    InvalidInput,
    NotFound,
    StringAnalyzerError,
    UnparsableQuery,
)
from string_analyzer.store import create_store

# Configure logging
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

store = create_store(config.STORE_BACKEND, config.DATABASE_URL)


def get_store():
    """Dependency to provide the string store."""
    return store


app = FastAPI(
    title="String Analyzer Service",
    description="Analyze, store and filter string properties",
    version=__version__
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ERROR_STATUS_CODES = {
    InvalidInput: 422,
    DuplicateRecord: status.HTTP_409_CONFLICT,
    NotFound: status.HTTP_404_NOT_FOUND,
    UnparsableQuery: status.HTTP_400_BAD_REQUEST,
}


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "String Analyzer Service",
        "version": __version__,
        "endpoints": {
            "POST /strings": "Analyze and store a string",
            "GET /strings/{string_value}": "Get specific string analysis",
            "GET /strings": "Get all strings with optional filters",
            "GET /strings/filter-by-natural-language": "Filter using natural language",
            "DELETE /strings/{string_value}": "Delete a string"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


@app.post("/strings", response_model=schemas.StringResponse, status_code=status.HTTP_201_CREATED)
def create_string(
    string_data: schemas.StringCreate,
    store=Depends(get_store)
):
    """
    Analyze and store a string.
    Returns 409 if string already exists.
    """
    if string_data.value == "":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid request body or missing 'value' field"
        )

    return crud.create_string_analysis(store, string_data.value)


@app.get("/strings", response_model=schemas.StringListResponse)
def get_all_strings(
    is_palindrome: Optional[bool] = Query(None),
    min_length: Optional[int] = Query(None, ge=0),
    max_length: Optional[int] = Query(None, ge=0),
    word_count: Optional[int] = Query(None, ge=0),
    contains_character: Optional[str] = Query(None, min_length=1),
    store=Depends(get_store)
):
    """
    Get all strings with optional filtering.
    """
    return crud.get_all_strings(
        store,
        is_palindrome=is_palindrome,
        min_length=min_length,
        max_length=max_length,
        word_count=word_count,
        contains_character=contains_character
    )


# Registered before /strings/{string_value} so the path is not swallowed by it
@app.get("/strings/filter-by-natural-language", response_model=schemas.NaturalLanguageResponse)
def filter_by_natural_language(
    query: str = Query(..., description="Natural language query"),
    store=Depends(get_store)
):
    """
    Filter strings using natural language queries.
    Example: "all single word palindromic strings"
    """
    return crud.get_strings_by_natural_language(store, query)


@app.get("/strings/{string_value}", response_model=schemas.StringResponse)
def get_string(
    string_value: str,
    store=Depends(get_store)
):
    """
    Get analysis for a specific string.
    Returns 404 if string doesn't exist.
    """
    return crud.get_string_by_value(store, string_value)


@app.delete("/strings/{string_value}", status_code=status.HTTP_204_NO_CONTENT)
def delete_string(
    string_value: str,
    store=Depends(get_store)
):
    """
    Delete a string from the system.
    Returns 404 if string doesn't exist.
    """
    crud.delete_string(store, string_value)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Domain error handler
@app.exception_handler(StringAnalyzerError)
async def string_analyzer_exception_handler(request: Request, exc: StringAnalyzerError):
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"error": str(exc)}
    )


# Validation error handler
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = {}
    status_code = status.HTTP_400_BAD_REQUEST
    for error in exc.errors():
        field = error['loc'][-1]
        message = error['msg']
        errors[field] = message
        # a present but non-string "value" is unprocessable rather than malformed
        if (
            error['loc'][0] == "body"
            and field == "value"
            and error['type'] != "missing"
            and error.get('input') is not None
        ):
            status_code = 422

    return JSONResponse(
        status_code=status_code,
        content={
            "error": "Validation failed",
            "details": errors
        }
    )


# HTTPException handler
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # If detail is already a dict with 'error' key, return as is
    if isinstance(exc.detail, dict) and 'error' in exc.detail:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.detail
        )
    # Otherwise wrap it
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)}
    )


# Generic error handler
@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error"
        }
    )


def run():
    import uvicorn
    uvicorn.run("string_analyzer.main:app", host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
