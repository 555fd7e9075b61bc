from weddingplanner.models import Vendor


class TestVendorListing:
    def test_only_approved_vendors_are_listed(self, client, make_vendor):
        make_vendor(email="a@example.com", business_name="Approved Co")
        make_vendor(email="p@example.com", business_name="Pending Co", approved=False)

        response = client.get("/vendors")

        assert response.status_code == 200
        names = [v["businessName"] for v in response.json()]
        assert names == ["Approved Co"]

    def test_vendor_updates_own_profile(self, client, make_vendor, auth_headers):
        vendor = make_vendor()

        response = client.put(
            "/vendors/me",
            json={"location": "Bahir Dar", "description": "Fresh flowers"},
            headers=auth_headers(vendor),
        )

        assert response.status_code == 200
        assert response.json()["location"] == "Bahir Dar"


class TestVendorApproval:
    def test_admin_approves_vendor_and_email_is_sent(
        self, client, db, make_vendor, make_admin, auth_headers, mock_send_email
    ):
        vendor_user = make_vendor(approved=False)
        admin = make_admin()

        pending = client.get("/admin/vendors/pending", headers=auth_headers(admin))
        assert [v["id"] for v in pending.json()] == [vendor_user.vendor.id]

        response = client.post(
            f"/admin/vendors/{vendor_user.vendor.id}/approve", headers=auth_headers(admin)
        )

        assert response.status_code == 200
        body = response.json()
        assert body["emailSent"] is True
        assert body["vendor"]["isApproved"] is True

        mock_send_email.assert_awaited_once()
        kwargs = mock_send_email.await_args.kwargs
        assert kwargs["to"] == "vendor@example.com"
        assert kwargs["subject"] == "Your Vendor Account Has Been Approved!"
        assert "Addis Blooms" in kwargs["mjml_content"]

        db.expire_all()
        assert db.get(Vendor, vendor_user.vendor.id).approved_at is not None

    def test_approving_twice_conflicts(self, client, make_vendor, make_admin, auth_headers):
        vendor_user = make_vendor(approved=True)
        admin = make_admin()

        response = client.post(
            f"/admin/vendors/{vendor_user.vendor.id}/approve", headers=auth_headers(admin)
        )

        assert response.status_code == 409

    def test_email_failure_does_not_fail_approval(
        self, client, make_vendor, make_admin, auth_headers, mock_send_email
    ):
        from weddingplanner.email_service import EmailDeliveryError

        mock_send_email.side_effect = EmailDeliveryError("SMTP down")
        vendor_user = make_vendor(approved=False)
        admin = make_admin()

        response = client.post(
            f"/admin/vendors/{vendor_user.vendor.id}/approve", headers=auth_headers(admin)
        )

        assert response.status_code == 200
        assert response.json()["emailSent"] is False

    def test_non_admin_cannot_approve(self, client, make_vendor, make_client, auth_headers):
        vendor_user = make_vendor(approved=False)
        client_user = make_client()

        response = client.post(
            f"/admin/vendors/{vendor_user.vendor.id}/approve", headers=auth_headers(client_user)
        )

        assert response.status_code == 403
