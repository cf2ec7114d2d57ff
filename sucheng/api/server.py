"""
速成查字 FastAPI 服务

提供查字拆码、输入历史合并、打字练习进度接口
"""

import os
import time
import uuid
from dataclasses import asdict
from typing import List, Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from sucheng.engine import (
    LearnerEngine,
    create_engine,
    EngineConfig,
    Scheme,
    TypingState,
    merge_history,
    summarize,
    get_api_logger,
)

logger = get_api_logger()


# ===== 请求/响应模型 =====

class DecompositionItem(BaseModel):
    """单字拆码"""
    char: str
    parts: str


class LookupResponse(BaseModel):
    text: str
    scheme: str
    results: List[DecompositionItem]
    history: List[str]


class TypingStateModel(BaseModel):
    """练习状态"""
    user_input: str = ""
    completed_chars: int = Field(0, ge=0)
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    is_completed: bool = False
    total_errors: int = Field(0, ge=0)
    last_error_char: str = ""


class AdvanceRequest(BaseModel):
    state: TypingStateModel = Field(default_factory=TypingStateModel)
    target_text: str = Field(..., description="练习文本")


class AdvanceResponse(BaseModel):
    state: TypingStateModel
    char_states: List[str]
    cpm: int
    accuracy: int


class HistoryRequest(BaseModel):
    entry: str = Field("", description="新输入")
    history: List[str] = Field(default_factory=list, description="现有历史，最新的在前")


class HistoryResponse(BaseModel):
    history: List[str]


class HealthResponse(BaseModel):
    status: str
    version: str


# ===== 全局引擎实例 =====
engine: Optional[LearnerEngine] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    global engine

    logger.info("速成查字 API 服务启动")
    config = EngineConfig(
        scheme=os.getenv("SUCHENG_SCHEME", Scheme.QUICK),
        mapping_path=os.getenv("SUCHENG_MAPPING") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
    engine = create_engine(config)
    logger.info(f"引擎初始化完成, 字码表 {len(engine.mapping)} 字")

    yield

    engine = None
    logger.info("速成查字 API 服务已停止")


app = FastAPI(
    title="Sucheng API",
    description="仓颉 / 速成拆码与打字练习 API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """请求日志"""
    request_id = str(uuid.uuid4())[:8]
    start_time = time.perf_counter()

    client_ip = request.client.host if request.client else "unknown"
    logger.info(
        f"[{request_id}] --> {request.method} {request.url.path} | IP: {client_ip}",
        extra={"request_id": request_id},
    )

    try:
        response = await call_next(request)
    except Exception as e:
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.error(
            f"[{request_id}] <-- ERROR | {elapsed_ms:.2f}ms | {type(e).__name__}: {e}",
            extra={"request_id": request_id, "duration_ms": round(elapsed_ms, 2)},
        )
        raise

    elapsed_ms = (time.perf_counter() - start_time) * 1000
    status_code = response.status_code
    log_level = "info" if status_code < 400 else "warning" if status_code < 500 else "error"
    getattr(logger, log_level)(
        f"[{request_id}] <-- {status_code} | {elapsed_ms:.2f}ms",
        extra={"request_id": request_id, "duration_ms": round(elapsed_ms, 2), "status_code": status_code},
    )

    response.headers["X-Request-ID"] = request_id
    response.headers["X-Response-Time"] = f"{elapsed_ms:.2f}ms"
    return response


def _require_engine() -> LearnerEngine:
    if engine is None:
        logger.error("引擎未就绪，拒绝请求")
        raise HTTPException(status_code=503, detail="引擎未就绪")
    return engine


# ===== API 路由 =====

@app.get("/health", response_model=HealthResponse)
async def health_check():
    from sucheng import __version__
    return HealthResponse(
        status="healthy" if engine else "not_ready",
        version=__version__,
    )


@app.get("/decompose", response_model=LookupResponse)
async def lookup(text: str, scheme: Optional[str] = None):
    """逐字拆码，并记入输入历史"""
    current = _require_engine()

    if not text.strip():
        logger.warning("无效请求: 空输入")
        raise HTTPException(status_code=400, detail="输入不能为空")
    if scheme is not None and scheme not in Scheme.ALL:
        raise HTTPException(status_code=400, detail=f"未知输入法方案: {scheme}")

    result = current.lookup(text, scheme)
    return LookupResponse(
        text=result.text,
        scheme=result.scheme,
        results=[DecompositionItem(char=r.char, parts=r.parts) for r in result.results],
        history=result.history,
    )


@app.post("/typing/advance", response_model=AdvanceResponse)
async def typing_advance(request: AdvanceRequest):
    """根据输入框内容计算练习进度"""
    current = _require_engine()

    state = current.practice(TypingState(**request.state.model_dump()), request.target_text)
    progress = current.progress(request.target_text, state.user_input)
    summary = summarize(state, request.target_text)

    return AdvanceResponse(
        state=TypingStateModel(**asdict(state)),
        char_states=[s.value for s in progress.char_states()],
        cpm=summary.cpm,
        accuracy=summary.accuracy,
    )


@app.post("/history/merge", response_model=HistoryResponse)
async def history_merge(request: HistoryRequest):
    """合并一条输入到调用方保存的历史"""
    limit = engine.config.history_limit if engine else EngineConfig.history_limit
    return HistoryResponse(history=merge_history(request.entry, request.history, limit=limit))


@app.get("/stats")
async def get_stats():
    current = _require_engine()
    stats = current.get_stats()
    logger.info(f"统计查询: {stats}")
    return stats


def main():
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))
    log_level = os.getenv("LOG_LEVEL", "info").lower()

    logger.info(f"启动速成查字 API 服务: http://{host}:{port}")
    logger.info(f"API 文档: http://{host}:{port}/docs")

    uvicorn.run(
        "sucheng.api.server:app",
        host=host,
        port=port,
        reload=False,
        workers=1,
        log_level=log_level,
    )


if __name__ == "__main__":
    main()
