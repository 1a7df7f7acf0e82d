from datetime import date
import uuid

TEST_SECRET = "test-secret-do-not-use-in-prod"


def years_ago(years: int, days: int = 0) -> date:
    """Date `years` calendar years before today, shifted forward by `days`."""
    today = date.today()
    try:
        anchor = today.replace(year=today.year - years)
    except ValueError:
        # Feb 29 on a non-leap target year
        anchor = today.replace(year=today.year - years, day=28)
    return date.fromordinal(anchor.toordinal() + days)


def make_registration(**overrides) -> dict:
    unique = uuid.uuid4().hex[:8]
    data = {
        "fullName": "Maria Silva",
        "email": f"user_{unique}@example.com",
        "password": "secret123",
        "gender": "female",
        "phone": "11987654321",
        "birthDate": years_ago(30).isoformat(),
    }
    data.update(overrides)
    return data


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
