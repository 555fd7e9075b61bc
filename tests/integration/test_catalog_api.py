class TestBrowse:
    def test_hides_inactive_services_and_unapproved_vendors(self, client, make_vendor, make_service):
        approved = make_vendor(email="a@example.com", business_name="Addis Blooms")
        pending = make_vendor(email="p@example.com", business_name="Pending Photo", approved=False)
        make_service(approved, name="Bridal Bouquet")
        make_service(approved, name="Old Package", active=False)
        make_service(pending, name="Photo Shoot", category="photography")

        response = client.get("/services")

        assert response.status_code == 200
        assert [s["name"] for s in response.json()] == ["Bridal Bouquet"]
        assert response.json()[0]["vendor"]["businessName"] == "Addis Blooms"

    def test_search_matches_vendor_name(self, client, make_vendor, make_service):
        florist = make_vendor(email="a@example.com", business_name="Addis Blooms")
        caterer = make_vendor(email="c@example.com", business_name="Injera House", category="catering")
        make_service(florist, name="Bridal Bouquet")
        make_service(caterer, name="Buffet", category="catering")

        response = client.get("/services", params={"search": "injera"})

        assert [s["name"] for s in response.json()] == ["Buffet"]

    def test_category_filter(self, client, make_vendor, make_service):
        vendor = make_vendor()
        make_service(vendor, name="Bouquet", category="flowers")
        make_service(vendor, name="Cake", category="catering")

        response = client.get("/services", params={"category": "catering"})

        assert [s["name"] for s in response.json()] == ["Cake"]

    def test_unapproved_vendor_service_is_not_found(self, client, make_vendor, make_service):
        service = make_service(make_vendor(approved=False))

        assert client.get(f"/services/{service.id}").status_code == 404


class TestVendorManagesServices:
    def test_create_update_and_deactivate(self, client, make_vendor, auth_headers):
        vendor = make_vendor()
        headers = auth_headers(vendor)

        created = client.post(
            "/services",
            json={"name": "Wedding Cake", "price": 4000, "category": "catering"},
            headers=headers,
        )
        assert created.status_code == 201
        service_id = created.json()["id"]

        updated = client.put(f"/services/{service_id}", json={"price": 4500}, headers=headers)
        assert updated.status_code == 200
        assert updated.json()["price"] == 4500

        removed = client.delete(f"/services/{service_id}", headers=headers)
        assert removed.status_code == 200

        mine = client.get("/vendor/services", headers=headers).json()
        assert mine[0]["isActive"] is False
        assert client.get(f"/services/{service_id}").status_code == 404

    def test_price_must_be_positive(self, client, make_vendor, auth_headers):
        response = client.post(
            "/services", json={"name": "Free", "price": 0}, headers=auth_headers(make_vendor())
        )

        assert response.status_code == 422

    def test_cannot_edit_another_vendors_service(self, client, make_vendor, make_service, auth_headers):
        owner = make_vendor(email="owner@example.com")
        other = make_vendor(email="other@example.com", business_name="Other")
        service = make_service(owner)

        response = client.put(
            f"/services/{service.id}", json={"price": 1}, headers=auth_headers(other)
        )

        assert response.status_code == 404

    def test_clients_cannot_create_services(self, client, make_client, auth_headers):
        response = client.post(
            "/services", json={"name": "X", "price": 10}, headers=auth_headers(make_client())
        )

        assert response.status_code == 403
