"""
Named remote procedures served over a single HTTP endpoint.

Every procedure is either a query (no input, reachable with GET or POST) or a
mutation (JSON object input, POST only). Inputs are validated against the
procedure's pydantic model before the handler runs; results are serialised
through the declared response model.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Type

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from .database import get_db
from .errors import BadRequestError, MethodNotSupportedError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

QUERY = "query"
MUTATION = "mutation"


@dataclass
class Procedure:
    name: str
    kind: str
    handler: Callable[..., Awaitable[Any]]
    input_model: Optional[Type[BaseModel]]
    output: TypeAdapter

    async def call(self, db: AsyncSession, raw_input: Any) -> Any:
        if self.input_model is None:
            result = await self.handler(db)
        else:
            try:
                payload = self.input_model.model_validate(raw_input)
            except PydanticValidationError as e:
                raise ValidationError.from_pydantic(e)
            result = await self.handler(db, payload)
        value = self.output.validate_python(result, from_attributes=True)
        return self.output.dump_python(value, mode="json")


class ProcedureRouter:
    """Collects procedures the way APIRouter collects routes."""

    def __init__(self):
        self.procedures: Dict[str, Procedure] = {}

    def _register(self, name, kind, input_model, response_model):
        def decorator(func):
            if name in self.procedures:
                raise ValueError(f"Procedure {name!r} registered twice")
            self.procedures[name] = Procedure(
                name=name,
                kind=kind,
                handler=func,
                input_model=input_model,
                output=TypeAdapter(response_model),
            )
            return func

        return decorator

    def query(self, name: str, response_model: Any):
        return self._register(name, QUERY, None, response_model)

    def mutation(self, name: str, input_model: Type[BaseModel], response_model: Any):
        return self._register(name, MUTATION, input_model, response_model)

    def include_router(self, other: "ProcedureRouter") -> None:
        for name, proc in other.procedures.items():
            if name in self.procedures:
                raise ValueError(f"Procedure {name!r} registered twice")
            self.procedures[name] = proc

    def get(self, name: str) -> Procedure:
        proc = self.procedures.get(name)
        if proc is None:
            raise NotFoundError(f"No procedure named {name!r}")
        return proc


async def _read_json_object(request: Request) -> Dict[str, Any]:
    body = await request.body()
    if not body.strip():
        return {}
    try:
        data = json.loads(body)
    except ValueError:
        raise BadRequestError("Request body is not valid JSON")
    if not isinstance(data, dict):
        raise BadRequestError("Request body must be a JSON object")
    return data


def build_rpc_router(procedures: ProcedureRouter, prefix: str = "/rpc") -> APIRouter:
    router = APIRouter(prefix=prefix, tags=["rpc"])

    @router.get("/{operation}")
    async def call_query(operation: str, db: AsyncSession = Depends(get_db)):
        proc = procedures.get(operation)
        if proc.kind != QUERY:
            raise MethodNotSupportedError(f"{operation} is a mutation; use POST")
        return {"result": await proc.call(db, None)}

    @router.post("/{operation}")
    async def call_procedure(operation: str, request: Request, db: AsyncSession = Depends(get_db)):
        proc = procedures.get(operation)
        raw_input = await _read_json_object(request)
        logger.debug("rpc %s %s", proc.kind, operation)
        return {"result": await proc.call(db, raw_input)}

    return router
