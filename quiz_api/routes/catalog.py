from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quiz_api.core.database import get_db
from quiz_api.schemas.catalog import DifficultyResponse, ScenarioResponse
from quiz_api.services.catalog import CatalogService

router = APIRouter(tags=["catalog"])


@router.get("/scenarios", response_model=List[ScenarioResponse])
def list_scenarios(db: Session = Depends(get_db)):
    """List every scenario"""
    return CatalogService(db).get_scenarios()


@router.get("/difficulties", response_model=List[DifficultyResponse])
def list_difficulties(db: Session = Depends(get_db)):
    """List every difficulty level with its time limit"""
    return CatalogService(db).get_difficulties()
