"""Tests for the FastAPI endpoints."""

import pytest
from fastapi.testclient import TestClient

from deckcalc.main import app

client = TestClient(app)

RECT = [[0, 0], [20, 0], [20, 13], [0, 13]]


@pytest.fixture(autouse=True)
def fresh_sketch():
    r = client.post("/api/sketch/reset")
    assert r.status_code == 200


def _px(state: dict, x: float, y: float) -> dict:
    """Feet -> canvas pixels using the viewport the server reported."""
    vp = state["viewport"]
    return {
        "x": vp["pad"] + (x - vp["origin_x"]) * vp["scale"],
        "y": vp["pad"] + (y - vp["origin_y"]) * vp["scale"],
    }


class TestHealthEndpoint:
    def test_health(self):
        r = client.get("/api/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"

    def test_unknown_path_is_not_served(self):
        assert client.get("/").status_code == 404
        assert client.get("/some/page").status_code == 404


class TestTakeoffEndpoint:
    def test_rectangle(self):
        r = client.post("/api/takeoff", json={"points": RECT})
        assert r.status_code == 200
        data = r.json()
        assert data["takeoff"]["board_rows"] == 27
        assert data["takeoff"]["joist_count"] == 10
        assert data["takeoff"]["clips_no_waste"] == 270
        assert data["takeoff"]["clips_with_waste"] == 284
        assert data["takeoff"]["board_run_label"] == "20'"
        assert data["sketch"]["perimeter_ft"] == 66
        assert data["issues"] == []

    def test_rotated(self):
        r = client.post("/api/takeoff", json={
            "points": RECT,
            "params": {"joists_rotated": True},
        })
        assert r.json()["takeoff"]["board_run_ft"] == 13

    def test_open_outline_reports_issue(self):
        r = client.post("/api/takeoff", json={"points": [[0, 0], [4, 0]]})
        assert r.status_code == 200
        data = r.json()
        assert data["takeoff"]["area_sq_ft"] == 260
        assert data["issues"][0]["code"] == "OPEN_OUTLINE"

    def test_clamped_spacing_is_flagged_not_rejected(self):
        r = client.post("/api/takeoff", json={"points": RECT, "params": {"joist_spacing_in": 0}})
        assert r.status_code == 200
        codes = {i["code"] for i in r.json()["issues"]}
        assert "SPACING_CLAMPED" in codes

    def test_bad_coordinate(self):
        r = client.post("/api/takeoff", json={"points": [[0, 0, 0]]})
        assert r.status_code == 422

    def test_layout(self):
        r = client.post("/api/layout", json={"points": RECT})
        assert r.status_code == 200
        data = r.json()
        assert len(data["boards"]) == 27
        assert len(data["joists"]) == 10
        assert data["boards_along_width"] is True


class TestSketchSession:
    def test_initial_state(self):
        data = client.get("/api/sketch").json()
        assert data["points"] == RECT
        assert data["grid"]["inches"] == 12
        assert data["vertex_count"] == 4
        assert data["session"]["edge_edit"] is None

    def test_click_adds_snapped_vertex(self):
        state = client.get("/api/sketch").json()
        r = client.post("/api/sketch/click", json=_px(state, 10.2, 5.9))
        data = r.json()
        assert data["changed"] is True
        assert data["points"][-1] == [10, 6]

    def test_drag_then_click_is_swallowed(self):
        state = client.get("/api/sketch").json()
        client.post("/api/sketch/drag/start", json={"index": 2})
        r = client.post("/api/sketch/drag/move", json=_px(state, 18.1, 11.8))
        assert r.json()["points"][2] == [18, 12]
        client.post("/api/sketch/drag/end")
        state = client.get("/api/sketch").json()
        r = client.post("/api/sketch/click", json=_px(state, 5, 5))
        assert r.json()["changed"] is False
        r = client.post("/api/sketch/click", json=_px(state, 5, 5))
        assert r.json()["changed"] is True

    def test_delete_near(self):
        state = client.get("/api/sketch").json()
        r = client.post("/api/sketch/delete-near", json=_px(state, 19.8, 0.1))
        assert r.json()["changed"] is True
        assert r.json()["vertex_count"] == 3

    def test_delete_during_drag(self):
        state = client.get("/api/sketch").json()
        client.post("/api/sketch/drag/start", json={"index": 3})
        state = client.post("/api/sketch/delete-near", json=_px(state, 0, 0)).json()
        assert state["vertex_count"] == 3
        r = client.post("/api/sketch/drag/move", json=_px(state, 5, 5))
        assert r.status_code == 200
        assert r.json()["points"][2] == [5, 5]

    def test_midpoint_and_length(self):
        r = client.post("/api/sketch/edges/0/midpoint")
        assert r.json()["points"][1] == [10, 0]
        r = client.put("/api/sketch/edges/0/length", json={"length_ft": 4})
        assert r.json()["points"][1] == [4, 0]

    def test_invalid_length_is_ignored(self):
        r = client.put("/api/sketch/edges/0/length", json={"length_ft": -2})
        assert r.status_code == 200
        assert r.json()["changed"] is False

    def test_edge_edit_flow(self):
        r = client.post("/api/sketch/edges/1/edit", json={"anchor": {"x": 300, "y": 120}})
        assert r.json()["session"]["edge_edit"]["value"] == 13
        client.put("/api/sketch/edit", json={"value": 10})
        r = client.post("/api/sketch/edit/commit")
        data = r.json()
        assert data["changed"] is True
        assert data["points"][2] == [20, 10]
        assert data["session"]["edge_edit"] is None

    def test_edge_edit_cancel(self):
        client.post("/api/sketch/edges/1/edit", json={})
        client.put("/api/sketch/edit", json={"value": 10})
        r = client.post("/api/sketch/edit/cancel")
        assert r.json()["points"] == RECT

    def test_edge_edit_text_is_ignored_and_closed(self):
        client.post("/api/sketch/edges/1/edit", json={})
        r = client.put("/api/sketch/edit", json={"value": "abc"})
        assert r.status_code == 200
        r = client.post("/api/sketch/edit/commit")
        data = r.json()
        assert data["changed"] is False
        assert data["points"] == RECT
        assert data["session"]["edge_edit"] is None

    def test_edge_edit_missing_edge(self):
        r = client.post("/api/sketch/edges/9/edit", json={})
        assert r.status_code == 404

    def test_grid(self):
        r = client.put("/api/sketch/grid", json={"inches": 6})
        assert r.json()["grid"]["feet"] == 0.5
        r = client.put("/api/sketch/grid", json={"inches": 7})
        assert r.status_code == 422

    def test_clear(self):
        r = client.post("/api/sketch/clear")
        assert r.json()["points"] == []

    def test_params_and_takeoff(self):
        r = client.put("/api/sketch/params", json={"joist_spacing_in": 12})
        assert r.json()["joist_spacing_in"] == 12
        data = client.get("/api/sketch/takeoff").json()
        assert data["takeoff"]["joist_count"] == 14  # floor(156 / 12) + 1


class TestExportEndpoint:
    def test_export_dxf(self):
        r = client.post("/api/export/dxf", json={"points": RECT})
        assert r.status_code == 200
        assert r.headers["content-type"] == "application/dxf"
        assert len(r.content) > 0

    def test_export_bad_grid(self):
        r = client.post("/api/export/dxf", json={"points": RECT, "grid_inches": 5})
        assert r.status_code == 422
