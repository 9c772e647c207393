def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "version": "1.0.0"}


def test_packages(client):
    response = client.get("/api/content/packages")
    assert response.status_code == 200
    plans = response.json()["data"]
    assert [p["plan_id"] for p in plans] == ["healing-basic", "mentoria-pro"]

    healing = plans[0]
    assert healing["is_popular"] is True
    assert healing["image_url"] == (
        "https://cdn.sanity.io/images/testproj/production/abc123-800x600.png"
    )
    # Null CMS fields come back as empty defaults
    assert plans[1]["features"] == []
    assert plans[1]["is_popular"] is False


def test_packages_by_category(client, cms):
    plans = client.get("/api/content/packages", params={"category": "mentoria"}).json()["data"]
    assert [p["plan_id"] for p in plans] == ["mentoria-pro"]
    assert cms.calls[-1][1] == {"category": "mentoria"}


def test_single_package(client):
    response = client.get("/api/content/packages/healing-basic")
    assert response.status_code == 200
    assert response.json()["data"]["price"] == 15000

    missing = client.get("/api/content/packages/nope")
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "message": "Plan not found"}


def test_testimonials_healing_includes_uncategorized(client):
    data = client.get("/api/content/testimonials", params={"category": "healing"}).json()["data"]
    assert [t["name"] for t in data] == ["Asha", "Meera"]

    career = client.get("/api/content/testimonials", params={"category": "career"}).json()["data"]
    assert [t["name"] for t in career] == ["Ravi"]


def test_blog(client):
    posts = client.get("/api/content/blog").json()["data"]
    assert len(posts) == 1
    post = posts[0]
    assert post["id"] == "post-1"
    assert post["slug"] == "finding-calm"
    assert post["image_url"].endswith("xyz789-1200x630.jpg")
    assert post["image_alt"] == "A quiet lake"


def test_site_settings(client):
    data = client.get("/api/content/settings").json()["data"]
    assert data["site_title"] == "Claryntia"
    assert data["upi_id"] == "claryntia@okhdfc"
    assert data["upi_qr_image_url"] is None


def test_cms_outage_is_bad_gateway(client, cms):
    cms.down = True
    for path in ["/api/content/packages", "/api/content/testimonials",
                 "/api/content/blog", "/api/content/settings"]:
        response = client.get(path)
        assert response.status_code == 502
        assert response.json()["success"] is False


def test_checkout_with_cms_outage(client, cms):
    cms.down = True
    response = client.post("/api/checkout/create-order", json={
        "planId": "healing-basic",
        "name": "Priya Sharma",
        "email": "priya@example.com",
        "phone": "9876543210",
    })
    assert response.status_code == 502


def test_malformed_plan_is_bad_gateway(client, cms):
    cms.plans.append({"planId": "draft", "title": "Draft", "price": None, "order": 3})

    listing = client.get("/api/content/packages")
    assert listing.status_code == 502
    assert listing.json() == {"success": False, "message": "Content service unavailable. Please try again later."}

    assert client.get("/api/content/packages/draft").status_code == 502
    assert client.get("/api/content/packages/healing-basic").status_code == 200

    checkout = client.post("/api/checkout/create-order", json={
        "planId": "draft",
        "name": "Priya Sharma",
        "email": "priya@example.com",
        "phone": "9876543210",
    })
    assert checkout.status_code == 502
    assert checkout.json()["success"] is False


def test_malformed_testimonial_and_post_are_bad_gateway(client, cms):
    cms.testimonials.append({"name": "No Content", "rating": 5})
    cms.posts.append({"_id": "post-2", "slug": "untitled"})

    for path in ["/api/content/testimonials", "/api/content/blog"]:
        response = client.get(path)
        assert response.status_code == 502
        assert response.json()["success"] is False
