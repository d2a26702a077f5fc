from datetime import date

import pytest

from ecotrack import repositories
from ecotrack.auth.dependencies import AuthContext
from ecotrack.routes import admin_routes
from ecotrack.services.emissions import calculate_carbon


def test_build_activity_summary_seeds_known_activities() -> None:
    activity_data, total = admin_routes.build_activity_summary([])

    assert activity_data == {
        'Driving': {'total_amount': 0.0, 'total_carbon_emission': 0.0},
        'ElectricityUsage': {'total_amount': 0.0, 'total_carbon_emission': 0.0},
        'WasteDisposal': {'total_amount': 0.0, 'total_carbon_emission': 0.0},
    }
    assert total == 0.0


def test_build_activity_summary_ignores_unknown_activities() -> None:
    activity_data, total = admin_routes.build_activity_summary([
        ('Driving', 100.0, 21.0),
        ('Flying', 50.0, 0.0),
        ('WasteDisposal', 10.0, 0.6),
    ])

    assert 'Flying' not in activity_data
    assert activity_data['Driving'] == {'total_amount': 100.0, 'total_carbon_emission': 21.0}
    assert total == pytest.approx(21.6)


@pytest.mark.parametrize('auth', [None, AuthContext(role='guest'), AuthContext(role='user', user_id=1)])
def test_dashboard_redirects_non_admins(db_session, make_request, auth) -> None:
    response = admin_routes.dashboard(make_request('/dashboard'), auth=auth, db=db_session)

    assert response.status_code == 302
    assert response.headers['location'] == '/admin'


def test_dashboard_aggregates_all_users(db_session, make_request) -> None:
    users = [
        repositories.create_user(db_session, name=name, email=f'{name}@example.com', password_hash='h', avatar='/uploads/a.png')
        for name in ('ada', 'bob', 'cy')
    ]
    logged = [
        (users[0].id, 'Driving', 100),
        (users[1].id, 'Driving', 40),
        (users[1].id, 'ElectricityUsage', 20),
        (users[2].id, 'WasteDisposal', 15),
    ]
    for user_id, activity, amount in logged:
        repositories.create_log_entry(
            db_session,
            user_id=user_id,
            entry_date=date(2024, 6, 1),
            activity=activity,
            amount=amount,
            carbon_emission=calculate_carbon(activity, amount),
        )

    response = admin_routes.dashboard(make_request('/dashboard'), auth=AuthContext(role='admin'), db=db_session)

    context = response.context
    assert response.status_code == 200
    assert response.template.name == 'dashboard.html'
    assert context['total_users'] == 3
    assert context['activity_data']['Driving']['total_amount'] == pytest.approx(140)
    assert context['activity_data']['Driving']['total_carbon_emission'] == pytest.approx(140 * 0.21)
    assert context['activity_data']['ElectricityUsage']['total_carbon_emission'] == pytest.approx(20 * 0.527)
    assert context['total_carbon_emission'] == pytest.approx(
        sum(calculate_carbon(activity, amount) for _user_id, activity, amount in logged)
    )
