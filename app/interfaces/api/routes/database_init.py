"""One-time database initialisation endpoint."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.use_cases import bootstrap_database
from app.config import Settings
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import require_init_capability
from app.interfaces.api.schemas import InitResponse

router = APIRouter(prefix="/init", tags=["init"])
logger = logging.getLogger(__name__)


@router.post("", response_model=InitResponse)
def initialize(
    settings: Settings = Depends(require_init_capability),
    db: Session = Depends(get_db),
) -> InitResponse:
    """Create the tables and seed the default administrator."""

    try:
        results = bootstrap_database(db, settings)
    except (SQLAlchemyError, ValueError) as exc:
        db.rollback()
        logger.exception("Database initialization failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc
    return InitResponse(
        success=True, message="Database initialized successfully!", results=results
    )
