from typing import List, Optional

from fastapi import FastAPI, Path, Query, Request
from fastapi.responses import JSONResponse

from .config import GeneratorSettings, build_generator
from .errors import (
	CancelledError,
	ContentionError,
	CounterOverflowError,
	IdGenerationError,
	InvalidArgumentError,
	StoreCorruptedError,
	StoreUnavailableError,
)
from .id_generator import IdGenerator
from .logging import configure_logging

_STATUS_CODES = {
	InvalidArgumentError: 400,
	CounterOverflowError: 409,
	StoreCorruptedError: 500,
	StoreUnavailableError: 503,
	ContentionError: 503,
	CancelledError: 504,
}


def create_app(
	generator: Optional[IdGenerator] = None,
	settings: Optional[GeneratorSettings] = None,
) -> FastAPI:
	app = FastAPI(title="Scoped ID Generator API", version="1.0.0")

	if generator is None:
		settings = settings or GeneratorSettings.from_env()
		configure_logging(json_output=settings.log_json, level=settings.log_level)
		generator = build_generator(settings)
	gen = generator

	@app.exception_handler(IdGenerationError)
	async def _id_generation_error(request: Request, exc: IdGenerationError) -> JSONResponse:
		status = next((code for cls, code in _STATUS_CODES.items() if isinstance(exc, cls)), 500)
		return JSONResponse(status_code=status, content={"detail": str(exc)})

	@app.get("/next/{scope}")
	def get_next(scope: str = Path(..., min_length=1)) -> int:
		return gen.next_id(scope)

	@app.get("/range/{scope}")
	def get_range(
		scope: str = Path(..., min_length=1),
		count: int = Query(1, gt=0, le=100000),
	) -> List[int]:
		return gen.get_id_range(scope, count)

	return app


# For uvicorn: `uvicorn blockid.api:create_app --factory`
