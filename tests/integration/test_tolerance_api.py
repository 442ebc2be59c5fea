from fastapi.testclient import TestClient

from tolcalc.main import app

client = TestClient(app)


def test_tolerance_general_3mm_medium():
    resp = client.get("/api/v1/tolerance/general", params={"dimension": "3", "tolerance_class": "m"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["found"] is True
    assert data["mode"] == "general"
    result = data["result"]
    assert result["range_text"] == "3 - 6"
    assert result["tolerance"] == 0.1
    assert result["upper_limit_text"] == "3.100"
    assert result["lower_limit_text"] == "2.900"


def test_tolerance_general_designation():
    resp = client.get("/api/v1/tolerance/general", params={"dimension": "50", "tolerance_class": "ISO 2768-f"})
    assert resp.status_code == 200
    assert resp.json()["result"]["tolerance"] == 0.15


def test_tolerance_fit_shaft_h6_10mm():
    resp = client.get(
        "/api/v1/tolerance/fit",
        params={"dimension": "10", "category": "shaft", "fit_class": "h6"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["found"] is True
    result = data["result"]
    assert result["range_text"] == "10 - 18"
    assert result["upper_dev"] == 0
    assert result["lower_dev"] == -11
    assert result["upper_limit_text"] == "10.000"
    assert result["lower_limit_text"] == "9.989"


def test_tolerance_fit_defaults_from_settings():
    # DEFAULT_DIMENSION=3, shaft h6 -> 3-6 bracket, 0/-8
    resp = client.get("/api/v1/tolerance/fit")
    assert resp.status_code == 200
    result = resp.json()["result"]
    assert result["category"] == "shaft"
    assert result["fit_class"] == "h6"
    assert result["lower_dev"] == -8


def test_tolerance_fit_defaults_follow_env(monkeypatch):
    monkeypatch.setenv("DEFAULT_FIT_CATEGORY", "hole")
    monkeypatch.setenv("DEFAULT_FIT_CLASS", "H7")
    resp = client.get("/api/v1/tolerance/fit", params={"dimension": "25"})
    result = resp.json()["result"]
    assert result["category"] == "hole"
    assert result["upper_dev"] == 21


def test_tolerance_not_found_is_not_an_error():
    for params in (
        {"dimension": "-5", "tolerance_class": "m"},
        {"dimension": "abc", "tolerance_class": "m"},
        {"dimension": "1", "tolerance_class": "v"},
    ):
        resp = client.get("/api/v1/tolerance/general", params=params)
        assert resp.status_code == 200
        data = resp.json()
        assert data["found"] is False
        assert data["result"] is None
        assert data["message"]

    resp = client.get(
        "/api/v1/tolerance/fit",
        params={"dimension": "-5", "category": "hole", "fit_class": "H7"},
    )
    assert resp.status_code == 200
    assert resp.json()["found"] is False


def test_tolerance_invalid_selectors_are_rejected():
    resp = client.get("/api/v1/tolerance/general", params={"dimension": "3", "tolerance_class": "q"})
    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "INPUT_ERROR"

    resp = client.get("/api/v1/tolerance/fit", params={"dimension": "3", "category": "pin"})
    assert resp.status_code == 400

    resp = client.get("/api/v1/tolerance/classes", params={"mode": "gdt"})
    assert resp.status_code == 400


def test_tolerance_classes():
    resp = client.get("/api/v1/tolerance/classes", params={"mode": "fit", "category": "shaft"})
    assert resp.status_code == 200
    keys = [c["key"] for c in resp.json()["classes"]]
    assert keys.index("h9") < keys.index("h11")

    resp = client.get("/api/v1/tolerance/classes", params={"mode": "general"})
    data = resp.json()
    assert data["category"] is None
    assert [c["key"] for c in data["classes"]] == ["f", "m", "c", "v"]
    assert data["classes"][3]["label"] == "Extra coarse"


def test_tolerance_table_marks_active_bracket():
    resp = client.get("/api/v1/tolerance/table", params={"mode": "fit", "category": "hole", "dimension": "25"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["active_range_index"] == 4
    assert data["ranges"][4] == "18 - 30"

    resp = client.get("/api/v1/tolerance/table", params={"mode": "general"})
    data = resp.json()
    assert data["active_range_index"] is None
    assert data["rows"][3]["values"][0] is None


def test_tolerance_remap():
    resp = client.get("/api/v1/tolerance/remap", params={"fit_class": "h6", "target_category": "hole"})
    assert resp.status_code == 200
    assert resp.json()["fit_class"] == "H6"

    resp = client.get("/api/v1/tolerance/remap", params={"fit_class": "js6", "target_category": "hole"})
    assert resp.json()["fit_class"] == "JS7"


def test_tolerance_fit_pair():
    resp = client.get("/api/v1/tolerance/fit-pair", params={"dimension": "25", "hole": "H7", "shaft": "g6"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["found"] is True
    assert data["result"]["fit_type"] == "clearance"
    assert data["result"]["min_clearance_um"] == 7
    assert data["result"]["max_clearance_um"] == 41

    resp = client.get("/api/v1/tolerance/fit-pair", params={"dimension": "900", "hole": "H7", "shaft": "g6"})
    assert resp.json()["found"] is False

    resp = client.get("/api/v1/tolerance/fit-pair", params={"dimension": "abc", "hole": "H7", "shaft": "g6"})
    assert resp.status_code == 200
    assert resp.json()["found"] is False


def test_health_and_metrics():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["tables"]["fit_brackets"] == 13

    client.get("/api/v1/tolerance/general", params={"dimension": "3", "tolerance_class": "m"})
    resp = client.get("/metrics/")
    assert resp.status_code == 200
    assert "tolcalc_resolve_total" in resp.text
