"""
Router for unit system preferences.
"""

from fastapi import APIRouter

from ..schemas import UnitSystemOut
from ..services.prompts import UNIT_SYSTEMS

router = APIRouter()


@router.get("", response_model=list[UnitSystemOut])
def list_unit_systems():
    """Unit systems a recipe can be generated in."""
    return UNIT_SYSTEMS
