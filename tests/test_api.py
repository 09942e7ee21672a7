"""
Tests for API endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from keratograph.main import app
from keratograph.utils.sample_data import generate_cornea_lines


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def export_lines():
    return generate_cornea_lines(n_meridians=8, n_rings=4)


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_root_endpoint(self, client):
        """Root endpoint should return basic info."""
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Keratograph Point Cloud"
        assert data["status"] == "running"

    def test_health_endpoint(self, client):
        """Health endpoint should return status."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "line_policy" in data


class TestPointsEndpoint:
    """Tests for POST /points."""

    def test_convert_export(self, client, export_lines):
        response = client.post(
            "/points",
            json={"lines": export_lines, "needs_correction": True, "line_policy": "skip", "source_name": "p.OD"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["point_count"] == 32
        assert data["meridian_count"] == 8
        assert data["skipped_lines"] == 4
        assert data["chirality_corrected"] is True
        assert data["source_name"] == "p.OD"
        assert len(data["x"]) == len(data["y"]) == len(data["z"]) == 32
        assert all(z <= 0 for z in data["z"])
        assert len(data["bounding_box"]) == 6

    def test_two_meridians(self, client):
        response = client.post(
            "/points",
            json={"lines": ["Seg: 0 y= 1 x= 2", "Seg: 1 y= 1 x= 2"], "needs_correction": True},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["x"] == pytest.approx([1.0, -1.0])
        assert data["y"] == pytest.approx([0.0, 0.0], abs=1e-12)
        assert data["z"] == [-2.0, -2.0]

    def test_empty_input(self, client):
        response = client.post("/points", json={"lines": [], "needs_correction": True})

        assert response.status_code == 422
        assert response.json()["code"] == "empty_input"

    def test_non_numeric_fail_fast(self, client):
        response = client.post(
            "/points",
            json={"lines": ["Seg: abc y= 1 x= 2"], "line_policy": "fail"},
        )

        assert response.status_code == 422
        data = response.json()
        assert data["code"] == "non_numeric_field"
        assert "segment" in data["detail"]

    def test_malformed_fail_fast(self, client, export_lines):
        response = client.post("/points", json={"lines": export_lines, "line_policy": "fail"})

        assert response.status_code == 422
        assert response.json()["code"] == "malformed_line"

    def test_invalid_policy(self, client):
        response = client.post("/points", json={"lines": ["Seg: 0 y= 1 x= 2"], "line_policy": "lenient"})

        assert response.status_code == 422

    def test_negative_radius_fail_fast(self, client):
        response = client.post(
            "/points",
            json={"lines": ["Seg: 0 y= -1 x= 2", "Seg: 1 y= 1 x= 2"], "line_policy": "fail"},
        )

        assert response.status_code == 422
        data = response.json()
        assert data["code"] == "non_numeric_field"
        assert "radial_distance" in data["detail"]

    def test_invalid_default_policy(self, client, monkeypatch):
        """A bad KERATOGRAPH_LINE_POLICY is reported as a 422, not a server error."""
        from keratograph.services import line_parser

        monkeypatch.setattr(line_parser, "DEFAULT_LINE_POLICY", "lenient")
        response = client.post("/points", json={"lines": ["Seg: 0 y= 1 x= 2"]})

        assert response.status_code == 422
        assert response.json()["code"] == "invalid_line_policy"
