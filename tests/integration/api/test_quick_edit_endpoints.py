import pytest
from fastapi.testclient import TestClient

from services.permission_service import CapabilityChecker, get_current_user_can


@pytest.mark.integration
class TestQuickEditEndpoints:

    @pytest.fixture(autouse=True)
    def fields(self, registry):
        registry.register("download", {
            "tax_class": {
                "label": "Tax class",
                "type": "select",
                "options": {0: "Default", 1: "Reduced"},
                "meta_key": "_tax_class_id",
            },
            "sale_price": {"label": "Sale price", "type": "number", "step": "0.01", "meta_key": "_sale_price"},
            "secret": {"capability": "delete_users"},
        })
        registry.register(["post", "page"], {
            "featured": {"label": "Featured", "type": "checkbox", "meta_key": "_is_featured"},
        })

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_list_fields(self, client: TestClient):
        response = client.get("/api/v1/quick-edit/download/fields/")

        assert response.status_code == 200
        data = response.json()
        assert [field["key"] for field in data] == ["tax_class", "sale_price"]
        assert data[0]["options"] == {"0": "Default", "1": "Reduced"}
        assert data[0]["meta_key"] == "_tax_class_id"
        assert data[1]["step"] == "0.01"

    def test_list_fields_unknown_post_type(self, client: TestClient):
        response = client.get("/api/v1/quick-edit/product/fields/")

        assert response.status_code == 404

    def test_render_column(self, client: TestClient):
        response = client.get("/api/v1/quick-edit/download/render/", params={"column_name": "tax_class"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert 'data-quick-edit-field="tax_class"' in response.text
        assert '<option value="1">Reduced</option>' in response.text

    def test_render_column_without_field(self, client: TestClient):
        response = client.get("/api/v1/quick-edit/download/render/", params={"column_name": "title"})

        assert response.status_code == 200
        assert response.text == ""

    def test_render_hides_field_without_capability(self, client: TestClient):
        response = client.get("/api/v1/quick-edit/download/render/", params={"column_name": "secret"})

        assert response.text == ""

    def test_render_requires_column_name(self, client: TestClient):
        response = client.get("/api/v1/quick-edit/download/render/")

        assert response.status_code == 422

    def test_save_select_and_reject_unknown_option(self, client: TestClient, sample_download, meta_repository):
        response = client.post(f"/api/v1/quick-edit/posts/{sample_download.id}/", data={"_tax_class_id": "1"})

        assert response.status_code == 200
        assert response.json()["updated"] == ["tax_class"]
        assert meta_repository.get_value(sample_download.id, "_tax_class_id") == "1"

        response = client.post(f"/api/v1/quick-edit/posts/{sample_download.id}/", data={"_tax_class_id": "9"})

        assert response.json()["rejected"] == ["tax_class"]
        assert meta_repository.get_value(sample_download.id, "_tax_class_id") == "1"

    def test_save_number(self, client: TestClient, sample_download, meta_repository):
        client.post(f"/api/v1/quick-edit/posts/{sample_download.id}/", data={"_sale_price": "19.999"})

        assert meta_repository.get_value(sample_download.id, "_sale_price") == pytest.approx(19.999)

    def test_save_checkbox(self, client: TestClient, sample_post, meta_repository):
        url = f"/api/v1/quick-edit/posts/{sample_post.id}/"

        client.post(url, data={"_inline_edit": "1"})
        assert meta_repository.get_value(sample_post.id, "_is_featured") == 0

        client.post(url, data={"_inline_edit": "1", "_is_featured": "1"})
        assert meta_repository.get_value(sample_post.id, "_is_featured") == 1

    def test_autosave_is_ignored(self, client: TestClient, sample_download, meta_repository):
        response = client.post(
            f"/api/v1/quick-edit/posts/{sample_download.id}/",
            params={"autosave": "true"},
            data={"_tax_class_id": "1"},
        )

        assert response.status_code == 200
        assert response.json()["updated"] == []
        assert meta_repository.get_value(sample_download.id, "_tax_class_id") is None

    def test_save_without_edit_permission(self, client: TestClient, sample_download, meta_repository):
        from main import app
        app.dependency_overrides[get_current_user_can] = lambda: CapabilityChecker({"read"})

        client.post(f"/api/v1/quick-edit/posts/{sample_download.id}/", data={"_tax_class_id": "1"})

        assert meta_repository.get_value(sample_download.id, "_tax_class_id") is None

    def test_save_unknown_post(self, client: TestClient):
        response = client.post("/api/v1/quick-edit/posts/9999/", data={"_tax_class_id": "1"})

        assert response.status_code == 404

    def test_save_post_type_without_fields(self, client: TestClient, post_repository):
        product = post_repository.create("product", title="Widget")

        response = client.post(f"/api/v1/quick-edit/posts/{product.id}/", data={"_price": "3"})

        assert response.status_code == 200
        assert response.json() == {
            "post_id": product.id,
            "updated": [],
            "deleted": [],
            "rejected": [],
            "failed": [],
            "skipped": [],
        }

    def test_footer_scripts_on_list_screen(self, client: TestClient):
        response = client.get("/api/v1/quick-edit/footer-scripts/", params={"screen_id": "edit-download"})

        assert response.status_code == 200
        assert response.text.count("<script>") == 1
        assert '"column": "tax_class"' in response.text

    def test_footer_scripts_elsewhere(self, client: TestClient):
        response = client.get("/api/v1/quick-edit/footer-scripts/", params={"screen_id": "dashboard"})

        assert response.text == ""

    def test_footer_scripts_per_request(self, client: TestClient):
        first = client.get("/api/v1/quick-edit/footer-scripts/", params={"screen_id": "edit-post"})
        second = client.get("/api/v1/quick-edit/footer-scripts/", params={"screen_id": "edit-post"})

        assert "<script>" in first.text
        assert "<script>" in second.text

    def test_request_id_header(self, client: TestClient):
        response = client.get("/health")

        assert "X-Request-ID" in response.headers
