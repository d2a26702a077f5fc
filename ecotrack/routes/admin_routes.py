from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from ecotrack import repositories
from ecotrack.auth.dependencies import AuthContext, get_auth_context
from ecotrack.database import get_db
from ecotrack.services.emissions import ACTIVITIES
from ecotrack.templating import render

router = APIRouter(tags=['admin'])


def build_activity_summary(rows: list[tuple[str, float, float]]) -> tuple[dict[str, dict[str, float]], float]:
    """Fold grouped sums into per-activity totals; unknown activities are dropped."""
    activity_data = {
        activity: {'total_amount': 0.0, 'total_carbon_emission': 0.0}
        for activity in ACTIVITIES
    }
    total_carbon_emission = 0.0
    for activity, total_amount, total_emission in rows:
        if activity not in activity_data:
            continue
        activity_data[activity]['total_amount'] = total_amount
        activity_data[activity]['total_carbon_emission'] = total_emission
        total_carbon_emission += total_emission
    return activity_data, total_carbon_emission


@router.get('/dashboard')
def dashboard(
    request: Request,
    auth: AuthContext | None = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    if auth is None or not auth.is_admin:
        return RedirectResponse('/admin', status_code=status.HTTP_302_FOUND)

    total_users = repositories.count_users(db)
    activity_data, total_carbon_emission = build_activity_summary(repositories.summarize_activities(db))
    return render(
        request,
        'dashboard.html',
        'Admin Dashboard - EcoTrack',
        auth,
        total_users=total_users,
        activity_data=activity_data,
        total_carbon_emission=total_carbon_emission,
    )
