from __future__ import annotations

from typing import Any, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request, status
from pydantic import BaseModel

from ..models import ActionEvent, LogicalKey
from ..shortcuts.dispatcher import ShortcutDispatcher
from ..shortcuts.resolver import ElementResolver
from ..shortcuts.strategies import strategy_names

app = FastAPI(title="messenger-shortcuts")


class ShortcutRequest(BaseModel):
    action: str
    args: List[Any] = []


class ShortcutQueued(BaseModel):
    queued: bool
    action: str
    pending: int


class StrategySummary(BaseModel):
    key: str
    strategies: List[str]
    cached: Optional[str]


def get_dispatcher(request: Request) -> ShortcutDispatcher:
    dispatcher = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        raise HTTPException(status_code=503, detail="No document session attached")
    return dispatcher


def get_resolver(request: Request) -> ElementResolver:
    resolver = getattr(request.app.state, "resolver", None)
    if resolver is None:
        raise HTTPException(status_code=503, detail="No document session attached")
    return resolver


def attach_session(dispatcher: ShortcutDispatcher, resolver: ElementResolver) -> FastAPI:
    app.state.dispatcher = dispatcher
    app.state.resolver = resolver
    return app


@app.post("/shortcuts", response_model=ShortcutQueued, status_code=status.HTTP_202_ACCEPTED)
async def post_shortcut(payload: ShortcutRequest, dispatcher: ShortcutDispatcher = Depends(get_dispatcher)):
    """
    Queue a named action. The outcome is only logged; unknown names are
    accepted here and ignored by the dispatcher.
    """

    dispatcher.submit(ActionEvent(action=payload.action, args=list(payload.args)))
    return ShortcutQueued(queued=True, action=payload.action, pending=dispatcher.queue.qsize())


@app.get("/strategies", response_model=List[StrategySummary])
def list_strategies(resolver: ElementResolver = Depends(get_resolver)):
    names = strategy_names(resolver.strategies)
    summaries = []
    for key in LogicalKey:
        cached = resolver.cached_strategy(key)
        summaries.append(
            StrategySummary(
                key=key.value,
                strategies=names.get(key.value, []),
                cached=cached.name if cached else None,
            )
        )
    return summaries


@app.get("/health")
def health(request: Request) -> dict[str, Any]:
    dispatcher = getattr(request.app.state, "dispatcher", None)
    return {
        "status": "ok",
        "session_attached": dispatcher is not None,
        "pending": dispatcher.queue.qsize() if dispatcher else 0,
    }
