"""FastAPI application for dealer price matching."""

import logging
from functools import wraps
from typing import Callable, Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import ValidationError

from ..validation import PriceMatchError
from .models import (
    CompareOptions,
    DetailedHealthResponse,
    ErrorResponse,
    HealthResponse,
    RepriceOptions,
)
from .service import PriceMatchService

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Unreadable file or invalid options"},
    500: {"model": ErrorResponse, "description": "Internal error"},
}


def handle_api_errors(operation_name: str) -> Callable:
    """
    Decorator to handle common API exceptions with consistent error responses.

    Args:
        operation_name: Name of the operation for logging purposes

    Returns:
        Decorated function with standardized error handling
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except PriceMatchError as e:
                logger.warning(f"{operation_name} - Input error: {e}")
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
                )
            except ValidationError as e:
                logger.warning(f"{operation_name} - Request validation error: {e}")
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
                )
            except ValueError as e:
                # Raised by the config manager for an invalid output config
                logger.error(f"{operation_name} - Configuration error: {e}")
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail="Invalid configuration",
                )
            except FileNotFoundError as e:
                logger.error(f"{operation_name} - Configuration file not found: {e}")
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail="Configuration file not found",
                )
            except Exception as e:
                logger.error(f"{operation_name} - Internal error: {e}", exc_info=True)
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=f"Internal server error during {operation_name.lower()}",
                )

        return wrapper

    return decorator


def csv_attachment(content: str, filename: str) -> Response:
    """Wrap CSV text in a downloadable response."""
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


app = FastAPI(
    title="Dealer Price Match API",
    description="Best price reconciliation across dealer price lists",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

service = PriceMatchService()


@app.get("/", response_model=HealthResponse, tags=["Health"])
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "dealer-price-match-api",
        "version": API_VERSION,
    }


@app.get("/health", response_model=DetailedHealthResponse, tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "systems": {
            "compare": "available",
            "reprice": "available",
        },
    }


@app.post(
    "/compare",
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
    tags=["Comparison"],
)
@handle_api_errors("Comparison")
async def compare_dealers(
    primary_file: UploadFile = File(..., description="First dealer price list"),
    secondary_file: UploadFile = File(..., description="Second dealer price list"),
    delimiter: str = Form(";"),
    primary_code_index: int = Form(0),
    primary_price_index: int = Form(1),
    secondary_code_index: int = Form(0),
    secondary_price_index: int = Form(1),
    dealer_column: int = Form(-1),
    description_index: int = Form(-1),
    weight_index: int = Form(-1),
    worst_price_index: int = Form(-1),
    worst_dealer_index: int = Form(-1),
    dealer_number: Optional[int] = Form(None),
    offset_percentage: Optional[float] = Form(None),
    additional_columns: bool = Form(False),
) -> Response:
    """
    Compare two dealer price lists.

    Every code of the first file yields one row with the best price and the
    dealer offering it. Codes found only in the second file are appended
    after them. The result is returned as a CSV attachment.
    """
    options = CompareOptions(
        delimiter=delimiter,
        primary_code_index=primary_code_index,
        primary_price_index=primary_price_index,
        secondary_code_index=secondary_code_index,
        secondary_price_index=secondary_price_index,
        dealer_column=dealer_column,
        description_index=description_index,
        weight_index=weight_index,
        worst_price_index=worst_price_index,
        worst_dealer_index=worst_dealer_index,
        dealer_number=dealer_number,
        offset_percentage=offset_percentage,
        additional_columns=additional_columns,
    )
    primary = await primary_file.read()
    secondary = await secondary_file.read()

    content = await service.compare(primary, secondary, options)
    return csv_attachment(content, "comparison.csv")


@app.post(
    "/reprice",
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
    tags=["Repricing"],
)
@handle_api_errors("Repricing")
async def reprice_catalog(
    catalog_file: UploadFile = File(..., description="Product catalog"),
    dealer_file: UploadFile = File(..., description="Dealer price list"),
    price_index: int = Form(...),
    code_index: int = Form(0),
    delimiter: str = Form(";"),
    percentage: float = Form(0.0),
    dealer_code_index: int = Form(0),
    dealer_price_index: int = Form(1),
    dealer_label_index: int = Form(-1),
    worst_price_index: int = Form(-1),
    worst_dealer_index: int = Form(-1),
    include_dealer: bool = Form(False),
    additional_columns: bool = Form(False),
) -> Response:
    """
    Insert marked-up dealer prices into the product catalog.

    The new price column is placed after the catalog's price column.
    """
    options = RepriceOptions(
        delimiter=delimiter,
        price_index=price_index,
        code_index=code_index,
        percentage=percentage,
        dealer_code_index=dealer_code_index,
        dealer_price_index=dealer_price_index,
        dealer_label_index=dealer_label_index,
        worst_price_index=worst_price_index,
        worst_dealer_index=worst_dealer_index,
        include_dealer=include_dealer,
        additional_columns=additional_columns,
    )
    catalog = await catalog_file.read()
    dealer = await dealer_file.read()

    content = await service.reprice(catalog, dealer, options)
    return csv_attachment(content, "repriced_catalog.csv")
