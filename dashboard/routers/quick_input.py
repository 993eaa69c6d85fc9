from datetime import datetime

from fastapi import APIRouter, Depends

from ..deps import get_now
from ..nlp.parser import parse_quick_input
from ..schemas import ParsedInput, QuickInputIn

router = APIRouter()


@router.post("/parse", response_model=ParsedInput, response_model_exclude_unset=True)
async def parse(payload: QuickInputIn, now: datetime = Depends(get_now)):
    """Preview what the quick-add bar would create, without storing anything."""
    return parse_quick_input(payload.text, now=now)
