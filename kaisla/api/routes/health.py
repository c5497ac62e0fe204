from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from kaisla.api.deps import public
from kaisla.core.config import get_settings
from kaisla.core.database import check_db_connected, get_db
from kaisla.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
@public
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """Report API status and database connectivity for load balancers and container probes."""
    return HealthResponse(
        environment=get_settings().APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
    )
