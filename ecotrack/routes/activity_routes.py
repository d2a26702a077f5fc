import logging
import math
from datetime import date

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ecotrack import repositories
from ecotrack.auth.dependencies import AuthContext, get_auth_context
from ecotrack.database import get_db
from ecotrack.services.emissions import ACTIVITIES, calculate_carbon
from ecotrack.templating import render

router = APIRouter(tags=['activity'])

logger = logging.getLogger(__name__)

SAVED_MESSAGE = 'Data logged successfully.'
NOT_SAVED_MESSAGE = 'Carbon emission calculated only, data not saved.'


class LogResultResponse(BaseModel):
    activity: str
    amount: float
    carbon_emission: float = Field(serialization_alias='carbonEmission')
    message: str


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'error': message})


def parse_log_fields(entry_date: str, amount: str) -> tuple[date, float]:
    """Parse the submitted date and amount, raising ValueError on bad input."""
    parsed_amount = float(amount)
    if not math.isfinite(parsed_amount):
        raise ValueError('amount must be a finite number')
    return date.fromisoformat(entry_date.strip()[:10]), parsed_amount


@router.get('/')
def index(request: Request, auth: AuthContext | None = Depends(get_auth_context)):
    if auth is None:
        return RedirectResponse('/login', status_code=status.HTTP_302_FOUND)
    return render(request, 'index.html', 'EcoTrack - Carbon Footprint Tracker', auth, activities=ACTIVITIES)


@router.post('/log')
def log_activity(
    entry_date: str | None = Form(None, alias='date'),
    activity: str | None = Form(None),
    amount: str | None = Form(None),
    auth: AuthContext | None = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    if not activity or not amount or not entry_date:
        return _error(status.HTTP_400_BAD_REQUEST, 'Missing required parameters: activity, amount, or date.')
    if auth is None:
        return _error(status.HTTP_401_UNAUTHORIZED, 'Unauthorized. Please log in to continue.')

    try:
        parsed_date, parsed_amount = parse_log_fields(entry_date, amount)
    except ValueError:
        return _error(status.HTTP_400_BAD_REQUEST, 'Invalid date or amount.')

    carbon_emission = calculate_carbon(activity, parsed_amount)

    # Only registered users have somewhere to store entries.
    if not auth.is_user:
        result = LogResultResponse(
            activity=activity,
            amount=parsed_amount,
            carbon_emission=carbon_emission,
            message=NOT_SAVED_MESSAGE,
        )
        return JSONResponse(result.model_dump(by_alias=True))

    try:
        repositories.create_log_entry(
            db,
            user_id=auth.user_id,
            entry_date=parsed_date,
            activity=activity,
            amount=parsed_amount,
            carbon_emission=carbon_emission,
        )
    except SQLAlchemyError:
        logger.exception('Error logging data for user %s', auth.user_id)
        db.rollback()
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Internal Server Error')

    result = LogResultResponse(
        activity=activity,
        amount=parsed_amount,
        carbon_emission=carbon_emission,
        message=SAVED_MESSAGE,
    )
    return JSONResponse(result.model_dump(by_alias=True))


@router.get('/history')
def history(
    request: Request,
    auth: AuthContext | None = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    if auth is None:
        return RedirectResponse('/login', status_code=status.HTTP_302_FOUND)
    if auth.is_guest:
        return RedirectResponse('/access-denied', status_code=status.HTTP_302_FOUND)

    entries = []
    if auth.user_id is not None:
        entries = repositories.list_log_entries_for_user(db, auth.user_id)
    return render(request, 'history.html', 'History - EcoTrack', auth, history=entries)
