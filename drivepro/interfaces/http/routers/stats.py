from fastapi import APIRouter, Depends

from ....application.use_cases.stats import ComputeStats
from ....infrastructure.repositories import InMemoryStore, get_store
from ..authz import require_admin
from ..schemas import StatsOut, stats_out

router = APIRouter(prefix="/api", tags=["stats"], dependencies=[Depends(require_admin)])


@router.get("/admin/stats", response_model=StatsOut)
@router.get("/dashboard/stats", response_model=StatsOut)
def admin_stats(store: InMemoryStore = Depends(get_store)):
    return stats_out(ComputeStats(store).execute())
