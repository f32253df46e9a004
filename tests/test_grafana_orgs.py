from __future__ import annotations

import httpx
import pytest

from dashboard_manager import Outcome, Status

from tests.helpers import FakeGrafana


def test_create_org_returns_new_id(make_client):
    grafana = FakeGrafana({("POST", "/api/orgs"): (200, {"orgId": 7, "message": "Organization created"})})
    client = make_client(grafana)

    outcome = client.create_org("Acme")

    assert outcome == Outcome(status=Status.OK, id=7)
    assert outcome.id == 7
    assert grafana.body() == {"name": "Acme"}
    assert grafana.requests[0].headers["Content-Type"] == "application/json"


def test_create_org_conflict_is_already_exists(make_client):
    client = make_client(FakeGrafana({("POST", "/api/orgs"): (409, {"message": "Organization name taken"})}))

    outcome = client.create_org("Acme")

    assert outcome == Outcome(status=Status.ALREADY_EXISTS)
    assert "id" not in outcome.model_dump()


def test_get_orgs_returns_raw_list(make_client):
    orgs = [{"id": 1, "name": "Main Org."}, {"id": 2, "name": "Acme"}]
    client = make_client(FakeGrafana({("GET", "/api/orgs"): (200, orgs)}))

    outcome = client.get_orgs()

    assert outcome.ok
    assert outcome.orgs == orgs


def test_get_orgs_access_denied(make_client):
    client = make_client(FakeGrafana({("GET", "/api/orgs"): (403, {"message": "Permission denied"})}))

    assert client.get_orgs() == Outcome(status=Status.ACCESS_DENIED)


@pytest.mark.parametrize("code,expected", [(200, Status.OK), (404, Status.NOT_FOUND), (500, Status.ERROR)])
def test_delete_org(make_client, code, expected):
    grafana = FakeGrafana({("DELETE", "/api/orgs/3"): (code, {"message": "x"})})
    client = make_client(grafana)

    assert client.delete_org(3).status is expected
    assert grafana.calls("DELETE", "/api/orgs/3") == 1


@pytest.mark.parametrize(
    "code,expected",
    [(200, Status.OK), (400, Status.ALREADY_EXISTS), (401, Status.ACCESS_DENIED), (404, Status.NOT_FOUND)],
)
def test_update_org(make_client, code, expected):
    grafana = FakeGrafana({("PUT", "/api/orgs/3"): (code, {"message": "x"})})
    client = make_client(grafana)

    assert client.update_org(3, "Acme Corp").status is expected
    assert grafana.body() == {"name": "Acme Corp"}


@pytest.mark.parametrize(
    "code,expected",
    [
        (200, Status.OK),
        (400, Status.ORG_NOT_FOUND),
        (404, Status.USER_NOT_FOUND),
        (409, Status.ALREADY_EXISTS),
        (403, Status.ACCESS_DENIED),
        (500, Status.ERROR),
    ],
)
def test_add_org_user(make_client, code, expected):
    grafana = FakeGrafana({("POST", "/api/orgs/3/users"): (code, {"message": "x"})})
    client = make_client(grafana)

    assert client.add_org_user(3, "ada", "Editor").status is expected
    assert grafana.body() == {"loginOrEmail": "ada", "role": "Editor"}


def test_get_org_users(make_client):
    users = [{"userId": 1, "login": "admin", "role": "Admin"}]
    client = make_client(FakeGrafana({("GET", "/api/orgs/3/users"): (200, users)}))

    outcome = client.get_org_users(3)

    assert outcome == Outcome(status=Status.OK, users=users)


def test_org_operations_time_out_to_connection_error(make_client, sleeps):
    def timeout(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    grafana = FakeGrafana({("POST", "/api/orgs"): timeout})
    client = make_client(grafana, max_retries=2)

    outcome = client.create_org("Acme")

    assert outcome == Outcome(status=Status.CONNECTION_ERROR)
    assert grafana.calls("POST", "/api/orgs") == 3
    assert len(sleeps) == 2


def test_client_satisfies_every_capability(make_client):
    from dashboard_manager import DashboardProvider, OrganizationProvider, UserProvider

    client = make_client(FakeGrafana({}))

    assert isinstance(client, DashboardProvider)
    assert isinstance(client, OrganizationProvider)
    assert isinstance(client, UserProvider)
