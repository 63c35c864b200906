"""Life clock endpoint"""
from datetime import date

from fastapi import APIRouter, Query

from app.api.responses import error_response
from app.utils.life_clock import life_countdown, validate_birthdate

router = APIRouter(prefix="/api/lifeclock", tags=["lifeclock"])


@router.get("")
async def get_life_clock(birthday: date = Query(..., description="Birthdate, YYYY-MM-DD")):
    try:
        validate_birthdate(birthday)
    except ValueError as e:
        return error_response(400, f"Please enter a valid birthdate. {e}.")
    return life_countdown(birthday).model_dump()
