# =============================================================================
# tests/test_frontend.py - Static bundle and SPA fallback
# =============================================================================

from tests.conftest import BUNDLE_JS, INDEX_HTML


def test_root_serves_index(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.get_data(as_text=True) == INDEX_HTML
    assert response.mimetype == "text/html"


def test_existing_asset_is_served(client):
    response = client.get("/assets/app.js")

    assert response.status_code == 200
    assert response.get_data(as_text=True) == BUNDLE_JS


def test_unmatched_route_falls_back_to_index(client):
    response = client.get("/conversations/7/settings")

    assert response.status_code == 200
    assert response.get_data(as_text=True) == INDEX_HTML


def test_missing_asset_falls_back_to_index(client):
    response = client.get("/assets/missing.js")

    assert response.get_data(as_text=True) == INDEX_HTML


def test_path_traversal_is_not_served(client, frontend_dist):
    secret = frontend_dist.parent / "secret.txt"
    secret.write_text("top secret", encoding="utf-8")

    # encoded so the test client does not collapse the dot segment
    response = client.get("/..%2fsecret.txt")

    assert response.status_code == 200
    assert response.get_data(as_text=True) == INDEX_HTML
    assert "top secret" not in response.get_data(as_text=True)


def test_unknown_api_route_is_json_404(client):
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.get_json() == {"error": "not found"}


def test_missing_bundle_is_404(app_config, tmp_path):
    from chatapp import create_app

    app_config["FRONTEND_DIST"] = str(tmp_path / "not-built")
    client = create_app(app_config).test_client()

    assert client.get("/").status_code == 404
    assert client.get("/api/health").status_code == 200
