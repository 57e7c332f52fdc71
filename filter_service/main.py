"""FastAPI service wrapping FilterEngine."""
import json
import time

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from loguru import logger
from pydantic import BaseModel, ValidationError

from dict_filter.automaton import MatchSpan
from dict_filter.config import FilterConfig
from dict_filter.engine import FilterEngine
from dict_filter.errors import LoadError
from dict_filter.log import setup_logger


class LoggingTextService:
    """Logs every call with its input, result and elapsed time."""

    def __init__(self, engine: FilterEngine):
        self.engine = engine

    def _log(self, method: str, text: str, result, begin: float) -> None:
        logger.info(
            "method={} text={!r} result={!r} took={:.6f}s",
            method, text, result, time.perf_counter() - begin,
        )

    def exists(self, text: str) -> bool:
        begin = time.perf_counter()
        result = self.engine.exists(text)
        self._log("exists", text, result, begin)
        return result

    def validate(self, text: str) -> bool:
        begin = time.perf_counter()
        result = self.engine.validate(text)
        self._log("validate", text, result, begin)
        return result

    def filter(self, text: str) -> str:
        begin = time.perf_counter()
        result = self.engine.filter(text)
        self._log("filter", text, result, begin)
        return result

    def find(self, text: str) -> list[MatchSpan]:
        begin = time.perf_counter()
        result = self.engine.find(text)
        self._log("find", text, len(result), begin)
        return result


class Req(BaseModel):
    message: str


class ReloadReq(BaseModel):
    pattern: str | None = None


async def read_message(request: Request) -> str:
    """Read ``message`` from a JSON body, form data or the query string."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            return Req.model_validate(await request.json()).message
        except json.JSONDecodeError as e:
            raise HTTPException(status_code=422, detail=f"invalid JSON body: {e}") from e
        except ValidationError as e:
            raise RequestValidationError(e.errors()) from e

    # 与 FormValue 一致：表单字段优先，其次查询参数
    form = await request.form() if content_type else {}
    message = form.get("message", request.query_params.get("message"))
    if message is None or not isinstance(message, str):
        raise HTTPException(status_code=422, detail="field \"message\" is required")
    return message


def create_app(config: FilterConfig | None = None, engine: FilterEngine | None = None) -> FastAPI:
    if engine is None:
        config = config or FilterConfig.from_env()
        engine = FilterEngine(config)
        engine.reload()
    svc = LoggingTextService(engine)

    app = FastAPI(title="Dictionary Filter Service", version="0.1.0")
    app.state.engine = engine

    @app.post("/exists")
    def exists(message: str = Depends(read_message)):
        return {"result": svc.exists(message)}

    @app.post("/validate")
    def validate(message: str = Depends(read_message)):
        return {"result": svc.validate(message)}

    @app.post("/filter")
    def filter_(message: str = Depends(read_message)):
        return {"result": svc.filter(message)}

    @app.post("/match")
    def match(message: str = Depends(read_message)):
        hits = [
            {"word": span.word, "start": span.start, "end": span.end}
            for span in svc.find(message)
        ]
        return {
            "matched": bool(hits),
            "hit_count": len(hits),
            "hits": hits,
        }

    @app.post("/reload")
    def reload(req: ReloadReq | None = None):
        try:
            word_count = engine.reload(req.pattern if req else None)
        except LoadError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e
        return {"result": word_count}

    @app.get("/stats")
    def stats():
        return engine.stats()

    return app


_config = FilterConfig.from_env()
setup_logger(_config.log_level, _config.log_dir)
app = create_app(_config)
