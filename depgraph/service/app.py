"""FastAPI application entrypoint for depgraph service mode."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from fastapi import Body, Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import DepGraphConfig
from ..pipeline import GraphConverter, UnsupportedFormatError


class HealthResponse(BaseModel):
    status: str


class DetectResponse(BaseModel):
    format: str
    ecosystem: str


def create_app(
    converter_factory: Optional[Callable[[], GraphConverter]] = None,
    *,
    config: DepGraphConfig | None = None,
) -> FastAPI:
    """Create the FastAPI application exposing conversion endpoints."""

    app = FastAPI(title="depgraph", version="1.0.0")

    def _default_factory() -> GraphConverter:
        return GraphConverter(config=config)

    factory = converter_factory or _default_factory

    async def get_converter() -> GraphConverter:
        # A fresh converter per request keeps conversions independent.
        return factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/detect", response_model=DetectResponse)
    async def detect(
        payload: Any = Body(...),
        converter: GraphConverter = Depends(get_converter),
    ) -> DetectResponse:
        input_format = converter.detect(payload)
        return DetectResponse(format=input_format.value, ecosystem=input_format.ecosystem.value)

    @app.post("/convert")
    def convert(
        payload: Any = Body(...),
        converter: GraphConverter = Depends(get_converter),
    ) -> Dict[str, Any]:
        # Sync handler: FastAPI runs it in the threadpool.
        return converter.convert(payload).to_dict()

    @app.exception_handler(UnsupportedFormatError)
    async def unsupported_format_handler(_: Request, exc: UnsupportedFormatError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "format": exc.input_format.value},
        )

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000, *, config: DepGraphConfig | None = None
) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(config=config), host=host, port=port)
