"""FastAPI application entrypoint for specaudit service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError
from ..engine import ConsistencyEngine
from ..reporting import references_to_dict, types_to_dict


class CheckRequest(BaseModel):
    path: str


class LocationModel(BaseModel):
    file: str
    line: Optional[int] = None


class StructuralTypeModel(BaseModel):
    name: str
    location: LocationModel
    kind: str


class DiagnosticModel(BaseModel):
    file: str
    message: str


class TypesResponse(BaseModel):
    synced: List[str]
    prose_only: List[StructuralTypeModel]
    schema_only: List[StructuralTypeModel]
    prose_files: int
    schema_files: int
    diagnostics: List[DiagnosticModel]
    has_discrepancies: bool


class ReferenceModel(BaseModel):
    target: str
    file: str
    line: int
    context: str


class ReferencesResponse(BaseModel):
    prose_files: int
    sections_indexed: int
    references_found: int
    valid: List[ReferenceModel]
    broken: List[ReferenceModel]
    diagnostics: List[DiagnosticModel]


class HealthResponse(BaseModel):
    status: str


EngineFactory = Callable[[str], ConsistencyEngine]


def create_app(engine_factory: EngineFactory = ConsistencyEngine.for_path) -> FastAPI:
    """Create the FastAPI application exposing specaudit checks."""

    app = FastAPI(title="specaudit Service", version="1.0.0")

    async def get_engine_factory() -> EngineFactory:
        return engine_factory

    async def _run(payload: CheckRequest, factory: EngineFactory, check: str) -> Dict[str, Any]:
        def _check() -> Dict[str, Any]:
            engine = factory(payload.path)
            if check == "types":
                return types_to_dict(engine.check_types())
            return references_to_dict(engine.check_references())

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _check)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/types", response_model=TypesResponse)
    async def check_types(
        payload: CheckRequest,
        factory: EngineFactory = Depends(get_engine_factory),
    ) -> Dict[str, Any]:
        return await _run(payload, factory, "types")

    @app.post("/references", response_model=ReferencesResponse)
    async def check_references(
        payload: CheckRequest,
        factory: EngineFactory = Depends(get_engine_factory),
    ) -> Dict[str, Any]:
        return await _run(payload, factory, "references")

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(
        _: Any, exc: NotADirectoryError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(
        _: Any, exc: ConfigError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "0.0.0.0", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
