from fastapi import APIRouter

from schemas.application import FIELD_OPTIONS
from utils.masks import FIELD_MASKS

router = APIRouter(prefix="/api", tags=["options"])


@router.get("/options")
async def list_options():
    """Choices for the selection fields and the input masks of the masked fields."""
    return {
        "options": FIELD_OPTIONS,
        "masks": FIELD_MASKS,
    }
