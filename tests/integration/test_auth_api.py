class TestRegister:
    def test_client_registration_returns_token(self, client):
        response = client.post(
            "/auth/register",
            json={
                "email": "Selam@Example.com",
                "password": "password123",
                "firstName": "Selam",
                "lastName": "Haile",
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["role"] == "client"
        assert body["token"]
        assert body["user"]["email"] == "selam@example.com"

    def test_vendor_registration_requires_business_name(self, client):
        response = client.post(
            "/auth/register",
            json={
                "email": "vendor@example.com",
                "password": "password123",
                "firstName": "Abebe",
                "role": "vendor",
            },
        )

        assert response.status_code == 422

    def test_vendor_starts_unapproved(self, client, db):
        from weddingplanner.models import Vendor

        response = client.post(
            "/auth/register",
            json={
                "email": "vendor@example.com",
                "password": "password123",
                "firstName": "Abebe",
                "role": "vendor",
                "businessName": "Addis Blooms",
            },
        )

        assert response.status_code == 201
        vendor = db.query(Vendor).one()
        assert vendor.business_name == "Addis Blooms"
        assert vendor.is_approved is False

    def test_admin_role_cannot_self_register(self, client):
        response = client.post(
            "/auth/register",
            json={
                "email": "root@example.com",
                "password": "password123",
                "firstName": "Root",
                "role": "admin",
            },
        )

        assert response.status_code == 422

    def test_duplicate_email_is_rejected(self, client, make_client):
        make_client(email="taken@example.com")

        response = client.post(
            "/auth/register",
            json={"email": "taken@example.com", "password": "password123", "firstName": "X"},
        )

        assert response.status_code == 409

    def test_short_password_is_rejected(self, client):
        response = client.post(
            "/auth/register",
            json={"email": "a@example.com", "password": "short", "firstName": "A"},
        )

        assert response.status_code == 422


class TestLogin:
    def test_login_and_me(self, client, make_client):
        make_client(email="hana@example.com")

        response = client.post(
            "/auth/login", json={"email": "hana@example.com", "password": "password123"}
        )
        assert response.status_code == 200
        token = response.json()["token"]

        me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["email"] == "hana@example.com"

    def test_wrong_password(self, client, make_client):
        make_client(email="hana@example.com")

        response = client.post(
            "/auth/login", json={"email": "hana@example.com", "password": "wrong-password"}
        )

        assert response.status_code == 401

    def test_me_without_token(self, client):
        assert client.get("/auth/me").status_code == 401

    def test_me_with_garbage_token(self, client):
        response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
