from sqlalchemy.ext.asyncio import AsyncSession

from family_tasks.core.rpc import ProcedureRouter
from family_tasks.core.timestamps import utcnow
from family_tasks.schemas.common import HealthStatus

router = ProcedureRouter()


@router.query("healthcheck", HealthStatus)
async def healthcheck(db: AsyncSession):
    return {"status": "ok", "timestamp": utcnow()}
