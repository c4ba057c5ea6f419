"""Customer records — optional ABN must pass the checksum when given."""


def _url(tenant):
    return f"/api/tenants/{tenant['id']}/customers/"


def test_create_customer_formats_abn(client, tenant):
    resp = client.post(_url(tenant), json={
        "business_name": "Woolworths Group",
        "abn": "88000014675",
        "suburb": "Bella Vista",
        "state": "NSW",
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["abn"] == "88 000 014 675"
    assert data["tenant_id"] == tenant["id"]
    assert data["is_active"] is True


def test_customer_without_abn(client, tenant):
    resp = client.post(_url(tenant), json={"business_name": "Local Cafe", "abn": ""})
    assert resp.status_code == 200
    assert resp.json()["abn"] is None


def test_customer_bad_abn_is_validation_error(client, tenant):
    resp = client.post(_url(tenant), json={"business_name": "Dodgy Co", "abn": "12 345 678 901"})
    assert resp.status_code == 422
    assert "Invalid ABN format or checksum" in resp.text


def test_list_customers_sorted_and_active_only(client, tenant):
    for name in ["Zeta Holdings", "Alpha Council", "Mid Shire"]:
        client.post(_url(tenant), json={"business_name": name})
    mid = client.get(_url(tenant)).json()[1]
    client.patch(f"{_url(tenant)}{mid['id']}", json={"is_active": False})

    names = [c["business_name"] for c in client.get(_url(tenant)).json()]
    assert names == ["Alpha Council", "Zeta Holdings"]
    everyone = client.get(_url(tenant), params={"include_inactive": True}).json()
    assert len(everyone) == 3


def test_update_customer(client, tenant):
    created = client.post(_url(tenant), json={"business_name": "Alpha Council"}).json()
    resp = client.patch(f"{_url(tenant)}{created['id']}", json={"abn": "51 824 753 556", "notes": "Net 30"})
    assert resp.status_code == 200
    assert resp.json()["abn"] == "51 824 753 556"
    assert resp.json()["notes"] == "Net 30"
    bad = client.patch(f"{_url(tenant)}{created['id']}", json={"abn": "51 824 753 557"})
    assert bad.status_code == 422


def test_customer_not_found(client, tenant):
    assert client.get(f"{_url(tenant)}999").status_code == 404
    assert client.get("/api/tenants/nope/customers/").status_code == 404
