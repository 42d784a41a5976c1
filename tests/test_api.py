"""
End-to-end API tests through FastAPI's TestClient.

Each test gets a fresh in-memory database via the `client` fixture.
"""
import pytest
from fastapi.testclient import TestClient

from franchisenexus.api.dependencies import get_application_service
from franchisenexus.application import ApplicationService
from franchisenexus.domain.workflow import ApplicationStatusPolicy
from franchisenexus.main import app


def register(client, email, role, password="Password123!", **extra):
    payload = {
        "firstName": "Test",
        "lastName": "User",
        "email": email,
        "password": password,
        "phoneNumber": "555-0100",
        "role": role,
    }
    payload.update(extra)
    return client.post("/api/auth/register", json=payload)


def auth_headers(client, email, role):
    """Register a user and return (headers, user_id)"""
    body = register(client, email, role).json()
    return {"Authorization": f"Bearer {body['token']}"}, body["userId"]


@pytest.fixture
def franchisor(client):
    return auth_headers(client, "owner@example.com", "ROLE_FRANCHISOR")


@pytest.fixture
def franchisee(client):
    return auth_headers(client, "applicant@example.com", "ROLE_FRANCHISEE")


@pytest.fixture
def admin(client):
    return auth_headers(client, "admin@example.com", "ROLE_ADMIN")


def create_business(client, headers, **fields):
    payload = {"name": "Tech Co", "industry": "Technology", "investmentRequired": 250000}
    payload.update(fields)
    response = client.post("/api/businesses", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def create_franchise(client, headers, business_id, **fields):
    payload = {
        "name": "Tech Paris",
        "industry": "Technology",
        "country": "France",
        "city": "Paris",
        "initialInvestment": 50000,
        "businessId": business_id,
    }
    payload.update(fields)
    response = client.post("/api/franchises", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


# ============================================
# Service endpoints
# ============================================

def test_root_and_health(client):
    root = client.get("/")
    assert root.status_code == 200
    assert root.json()["app"] == "FranchiseNexus"

    health = client.get("/health")
    assert health.json()["status"] == "healthy"


# ============================================
# Auth
# ============================================

class TestAuthEndpoints:

    def test_register_returns_token_and_profile(self, client):
        response = register(client, "new@example.com", "ROLE_FRANCHISOR")

        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["email"] == "new@example.com"
        assert body["role"] == "ROLE_FRANCHISOR"
        assert body["firstName"] == "Test"
        assert "password" not in body

    def test_duplicate_email_is_400(self, client):
        register(client, "dup@example.com", "ROLE_FRANCHISEE")
        response = register(client, "dup@example.com", "ROLE_FRANCHISOR")

        assert response.status_code == 400
        assert response.json() == {"status": 400, "message": "Email is already in use"}

    def test_login_success(self, client):
        register(client, "login@example.com", "ROLE_FRANCHISEE", password="Secret123")

        response = client.post("/api/auth/login", json={"email": "login@example.com", "password": "Secret123"})

        assert response.status_code == 200
        assert response.json()["token"]

    def test_login_wrong_password_is_401(self, client):
        register(client, "login@example.com", "ROLE_FRANCHISEE", password="Secret123")

        wrong = client.post("/api/auth/login", json={"email": "login@example.com", "password": "nope"})
        unknown = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "Secret123"})

        assert wrong.status_code == 401
        assert unknown.status_code == 401
        assert wrong.json() == unknown.json()

    def test_unknown_role_is_validation_error(self, client):
        response = register(client, "x@example.com", "ROLE_SUPERUSER")

        assert response.status_code == 400
        assert "role" in response.json()

    def test_issued_token_authenticates(self, client):
        headers, user_id = auth_headers(client, "me@example.com", "ROLE_FRANCHISEE")

        response = client.get(f"/api/users/{user_id}", headers=headers)

        assert response.status_code == 200
        assert response.json()["email"] == "me@example.com"


# ============================================
# Authentication & authorization
# ============================================

class TestAccessControl:

    def test_missing_token_is_401(self, client):
        response = client.get("/api/businesses")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["status"] == 401

    def test_invalid_token_is_401(self, client):
        response = client.get("/api/businesses", headers={"Authorization": "Bearer not.a.token"})
        assert response.status_code == 401

    def test_non_bearer_scheme_is_401(self, client):
        response = client.get("/api/businesses", headers={"Authorization": "Basic abc"})
        assert response.status_code == 401

    def test_franchisee_cannot_create_business(self, client, franchisee):
        headers, _ = franchisee

        response = client.post("/api/businesses", json={"name": "Nope"}, headers=headers)

        assert response.status_code == 403
        assert response.json() == {"status": 403, "message": "Access denied"}

    def test_only_admin_lists_users(self, client, franchisor, admin):
        assert client.get("/api/users", headers=franchisor[0]).status_code == 403

        response = client.get("/api/users", headers=admin[0])
        assert response.status_code == 200
        assert len(response.json()) == 2

    def test_franchisor_cannot_apply(self, client, franchisor):
        headers, _ = franchisor
        business = create_business(client, headers)
        franchise = create_franchise(client, headers, business["id"])

        response = client.post("/api/applications", json={"franchiseId": franchise["id"]}, headers=headers)

        assert response.status_code == 403

    def test_admin_deletes_business_but_cannot_update_it(self, client, franchisor, admin):
        business = create_business(client, franchisor[0])

        update = client.put(f"/api/businesses/{business['id']}", json={"name": "X"}, headers=admin[0])
        delete = client.delete(f"/api/businesses/{business['id']}", headers=admin[0])

        assert update.status_code == 403
        assert delete.status_code == 204

    def test_any_franchisor_may_update_any_business(self, client, franchisor):
        """Role-only authorization: ownership is not checked"""
        business = create_business(client, franchisor[0])
        other_headers, _ = auth_headers(client, "rival@example.com", "ROLE_FRANCHISOR")

        response = client.put(
            f"/api/businesses/{business['id']}", json={"name": "Taken Over"}, headers=other_headers
        )

        assert response.status_code == 200
        assert response.json()["ownerId"] == business["ownerId"]


# ============================================
# Businesses & franchises
# ============================================

class TestBusinessEndpoints:

    def test_create_and_read_business(self, client, franchisor):
        headers, user_id = franchisor

        business = create_business(client, headers)

        assert business["ownerId"] == user_id
        assert business["investmentRequired"] == 250000
        fetched = client.get(f"/api/businesses/{business['id']}", headers=headers).json()
        assert fetched["name"] == "Tech Co"

    def test_filters(self, client, franchisor):
        headers, user_id = franchisor
        create_business(client, headers, name="Tech Co", industry="Technology")
        create_business(client, headers, name="Pay Co", industry="FinTech")
        create_business(client, headers, name="Burger Co", industry="Food")

        by_industry = client.get("/api/businesses/industry/tech", headers=headers).json()
        by_owner = client.get(f"/api/businesses/owner/{user_id}", headers=headers).json()

        assert [b["name"] for b in by_industry] == ["Tech Co", "Pay Co"]
        assert len(by_owner) == 3

    def test_unknown_owner_is_404(self, client, franchisor):
        response = client.get("/api/businesses/owner/999", headers=franchisor[0])

        assert response.status_code == 404
        assert response.json()["message"] == "User not found with id: 999"

    def test_negative_investment_is_rejected(self, client, franchisor):
        response = client.post(
            "/api/businesses", json={"name": "Bad", "investmentRequired": -1}, headers=franchisor[0]
        )

        assert response.status_code == 400
        assert "investmentRequired" in response.json()

    def test_delete_unknown_business_is_404(self, client, admin):
        response = client.delete("/api/businesses/999", headers=admin[0])

        assert response.status_code == 404
        assert response.json() == {"status": 404, "message": "Business not found with id: 999"}


class TestFranchiseEndpoints:

    def test_franchise_under_missing_business_is_404(self, client, franchisor):
        response = client.post(
            "/api/franchises", json={"name": "Orphan", "businessId": 999}, headers=franchisor[0]
        )

        assert response.status_code == 404
        assert client.get("/api/franchises", headers=franchisor[0]).json() == []

    def test_franchise_filters(self, client, franchisor):
        headers, _ = franchisor
        business = create_business(client, headers)
        create_franchise(client, headers, business["id"], name="Cheap", initialInvestment=50000)
        create_franchise(client, headers, business["id"], name="Pricey", initialInvestment=150000,
                         city="Lyon")

        cheap = client.get("/api/franchises/investment", params={"maxInvestment": 100000}, headers=headers)
        paris = client.get("/api/franchises/location", params={"country": "france", "city": "PARIS"},
                           headers=headers)
        no_city = client.get("/api/franchises/location", params={"country": "France"}, headers=headers)
        of_business = client.get(f"/api/franchises/business/{business['id']}", headers=headers)

        assert [f["name"] for f in cheap.json()] == ["Cheap"]
        assert [f["name"] for f in paris.json()] == ["Cheap"]
        assert no_city.json() == []
        assert len(of_business.json()) == 2

    def test_missing_max_investment_is_400(self, client, franchisor):
        response = client.get("/api/franchises/investment", headers=franchisor[0])
        assert response.status_code == 400

    def test_delete_unknown_franchise_is_404(self, client, franchisor):
        response = client.delete("/api/franchises/999", headers=franchisor[0])

        assert response.status_code == 404
        assert response.json() == {"status": 404, "message": "Franchise not found with id: 999"}

    def test_delete_business_cascades(self, client, franchisor, franchisee):
        business = create_business(client, franchisor[0])
        franchise = create_franchise(client, franchisor[0], business["id"])
        application = client.post(
            "/api/applications", json={"franchiseId": franchise["id"]}, headers=franchisee[0]
        ).json()

        assert client.delete(f"/api/businesses/{business['id']}", headers=franchisor[0]).status_code == 204

        assert client.get(f"/api/franchises/{franchise['id']}", headers=franchisor[0]).status_code == 404
        assert client.get(f"/api/applications/{application['id']}", headers=franchisee[0]).status_code == 404


# ============================================
# Applications
# ============================================

class TestApplicationEndpoints:

    @pytest.fixture
    def franchise(self, client, franchisor):
        business = create_business(client, franchisor[0])
        return create_franchise(client, franchisor[0], business["id"])

    def test_franchisee_applies(self, client, franchisee, franchise):
        headers, user_id = franchisee

        response = client.post(
            "/api/applications",
            json={"franchiseId": franchise["id"], "coverLetter": "Hello", "status": "Approved"},
            headers=headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "Pending"
        assert body["applicantId"] == user_id
        assert body["submissionDate"]

    def test_status_change_by_franchisor(self, client, franchisor, franchisee, franchise):
        application = client.post(
            "/api/applications",
            json={"franchiseId": franchise["id"], "coverLetter": "Hello"},
            headers=franchisee[0],
        ).json()

        response = client.patch(
            f"/api/applications/{application['id']}/status", json={"status": "Approved"}, headers=franchisor[0]
        )

        assert response.status_code == 200
        assert response.json()["status"] == "Approved"
        assert response.json()["coverLetter"] == "Hello"

        approved = client.get("/api/applications/status/Approved", headers=franchisee[0]).json()
        assert [a["id"] for a in approved] == [application["id"]]

    def test_status_change_requires_status(self, client, franchisor, franchisee, franchise):
        application = client.post(
            "/api/applications", json={"franchiseId": franchise["id"]}, headers=franchisee[0]
        ).json()

        response = client.patch(f"/api/applications/{application['id']}/status", json={}, headers=franchisor[0])

        assert response.status_code == 400
        assert "status" in response.json()

    def test_franchisee_cannot_change_status(self, client, franchisee, franchise):
        application = client.post(
            "/api/applications", json={"franchiseId": franchise["id"]}, headers=franchisee[0]
        ).json()

        response = client.patch(
            f"/api/applications/{application['id']}/status", json={"status": "Approved"}, headers=franchisee[0]
        )

        assert response.status_code == 403

    def test_franchisee_updates_documents_only(self, client, franchisor, franchisee, franchise):
        application = client.post(
            "/api/applications", json={"franchiseId": franchise["id"]}, headers=franchisee[0]
        ).json()
        client.patch(
            f"/api/applications/{application['id']}/status", json={"status": "Rejected"}, headers=franchisor[0]
        )

        response = client.put(
            f"/api/applications/{application['id']}",
            json={"coverLetter": "Second try", "resume": "cv-v2.pdf", "status": "Approved"},
            headers=franchisee[0],
        )

        assert response.status_code == 200
        assert response.json()["coverLetter"] == "Second try"
        assert response.json()["status"] == "Rejected"

    def test_list_by_franchise_is_franchisor_or_admin(self, client, franchisor, franchisee, franchise):
        client.post("/api/applications", json={"franchiseId": franchise["id"]}, headers=franchisee[0])
        url = f"/api/applications/franchise/{franchise['id']}"

        assert client.get(url, headers=franchisee[0]).status_code == 403
        assert len(client.get(url, headers=franchisor[0]).json()) == 1

    def test_list_all_is_admin_only(self, client, admin, franchisee):
        assert client.get("/api/applications", headers=franchisee[0]).status_code == 403
        assert client.get("/api/applications", headers=admin[0]).json() == []

    def test_status_allow_list_rejects_unknown(self, client, franchisor, franchisee, franchise):
        app.dependency_overrides[get_application_service] = lambda: ApplicationService(
            ApplicationStatusPolicy(["Approved", "Rejected"])
        )
        application = client.post(
            "/api/applications", json={"franchiseId": franchise["id"]}, headers=franchisee[0]
        ).json()

        response = client.patch(
            f"/api/applications/{application['id']}/status", json={"status": "Maybe"}, headers=franchisor[0]
        )

        assert response.status_code == 400
        assert response.json()["status"] == 400

    def test_delete_application(self, client, franchisee, franchise):
        application = client.post(
            "/api/applications", json={"franchiseId": franchise["id"]}, headers=franchisee[0]
        ).json()

        assert client.delete(f"/api/applications/{application['id']}", headers=franchisee[0]).status_code == 204
        assert client.delete(f"/api/applications/{application['id']}", headers=franchisee[0]).status_code == 404


# ============================================
# Public browse
# ============================================

class TestPublicEndpoints:

    def test_public_browse_needs_no_token(self, client, franchisor):
        business = create_business(client, franchisor[0])
        franchise = create_franchise(client, franchisor[0], business["id"])

        assert len(client.get("/api/public/businesses").json()) == 1
        assert client.get(f"/api/public/businesses/{business['id']}").json()["name"] == "Tech Co"
        assert len(client.get("/api/public/businesses/industry/TECH").json()) == 1
        assert len(client.get("/api/public/franchises").json()) == 1
        assert client.get(f"/api/public/franchises/{franchise['id']}").json()["city"] == "Paris"
        assert len(client.get(f"/api/public/franchises/business/{business['id']}").json()) == 1
        assert len(client.get("/api/public/franchises/industry/tech").json()) == 1
        assert len(client.get("/api/public/franchises/investment", params={"maxInvestment": 50000}).json()) == 1
        assert len(client.get(
            "/api/public/franchises/location", params={"country": "France", "city": "Paris"}
        ).json()) == 1

    def test_public_unknown_id_is_404(self, client):
        response = client.get("/api/public/franchises/12")

        assert response.status_code == 404
        assert response.json()["message"] == "Franchise not found with id: 12"


# ============================================
# Users & error shapes
# ============================================

class TestUserEndpoints:

    def test_profile_update_keeps_email_and_role(self, client, franchisee):
        headers, user_id = franchisee

        response = client.put(
            f"/api/users/{user_id}",
            json={"firstName": "Jo", "profileImage": "me.png", "email": "hijack@example.com", "role": "ROLE_ADMIN"},
            headers=headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["firstName"] == "Jo"
        assert body["profileImage"] == "me.png"
        assert body["email"] == "applicant@example.com"
        assert body["role"] == "ROLE_FRANCHISEE"

    def test_admin_deletes_user_and_their_businesses(self, client, franchisor, admin):
        headers, user_id = franchisor
        create_business(client, headers)

        assert client.delete(f"/api/users/{user_id}", headers=admin[0]).status_code == 204
        assert client.get("/api/public/businesses").json() == []
        # Token of a deleted user no longer resolves
        assert client.get("/api/businesses", headers=headers).status_code == 401


def test_unknown_route_uses_error_body(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json()["status"] == 404


def test_unexpected_error_is_generic_500():
    class Exploding(ApplicationService):
        async def list_applications_by_status(self, *args, **kwargs):
            raise RuntimeError("database on fire")

    app.dependency_overrides[get_application_service] = lambda: Exploding()
    try:
        with TestClient(app, raise_server_exceptions=False) as quiet_client:
            headers, _ = auth_headers(quiet_client, "boom@example.com", "ROLE_FRANCHISOR")
            response = quiet_client.get("/api/applications/status/Pending", headers=headers)
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"status": 500, "message": "An unexpected error occurred"}


def test_error_body_is_documented(client):
    schema = client.get("/openapi.json").json()

    assert set(schema["components"]["schemas"]["ErrorResponse"]["properties"]) == {"status", "message"}
    delete_franchise = schema["paths"]["/api/franchises/{franchise_id}"]["delete"]
    assert delete_franchise["responses"]["404"]["content"]["application/json"]["schema"] == {
        "$ref": "#/components/schemas/ErrorResponse"
    }
