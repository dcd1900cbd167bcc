"""FastAPI application factory."""

import base64
import binascii
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from meal_snap.api.models import AnalyzeFoodRequest, ManualEntryRequest
from meal_snap.app_logging import configure_logging
from meal_snap.containers import AppContainer
from meal_snap.domain.errors import AnalysisError, MealSnapError, ValidationError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(MealSnapError)
    async def meal_snap_error(request: Request, exc: MealSnapError) -> JSONResponse:
        if isinstance(exc, AnalysisError):
            logger.error("Food analysis failed (%s): %s", exc.reason, exc.details)
        return JSONResponse(exc.to_dict(), status_code=exc.http_status)

    @app.exception_handler(RequestValidationError)
    async def invalid_request(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            {"error": "Invalid request body", "details": str(exc)}, status_code=400
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/analyze-food")
    async def analyze_food(
        body: AnalyzeFoodRequest, request: Request
    ) -> dict[str, object]:
        """Analyze a base64 encoded meal photo."""
        state_container: AppContainer = request.app.state.container
        if not body.image:
            raise ValidationError("Image data is required")
        image = _decode_image(body.image)
        record = await state_container.analysis_service.request_analysis(image)
        return record.to_dict()

    @app.post("/api/manual-entry")
    async def manual_entry(
        body: ManualEntryRequest, request: Request
    ) -> dict[str, object]:
        """Build a record from manually entered food items."""
        state_container: AppContainer = request.app.state.container
        entries = [item.model_dump() for item in body.food_items]
        record = state_container.manual_entry_service.save(entries)
        return record.to_dict()

    return app


def _decode_image(encoded: str) -> bytes:
    """Decode base64 image data, accepting an optional data URL prefix."""
    payload = "".join(encoded.split())
    if payload.startswith("data:") and "," in payload:
        payload = payload.split(",", 1)[1]
    try:
        image = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("Image data is not valid base64", str(exc)) from exc
    if not image:
        raise ValidationError("Image data is required")
    return image
