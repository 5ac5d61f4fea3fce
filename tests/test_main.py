"""
Tests for the command line entry point.
"""

import json

import pytest

import config.settings as settings
import main
from tripeval.registry.column_registry import COLUMN_IDS


@pytest.fixture
def data_root(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "LOG_FILE", str(tmp_path / "tripeval.log"))
    return str(tmp_path / "data")


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def _run(capsys, *argv):
    main.main(list(argv))
    return json.loads(capsys.readouterr().out)


def _board_item(item_id, **texts):
    return {
        "id": item_id,
        "name": f"Resposta {item_id}",
        "column_values": [
            {"id": COLUMN_IDS[field], "text": text, "type": "text"}
            for field, text in texts.items()
        ],
    }


def test_ingest_then_query(tmp_path, capsys, data_root):
    for item_id, rating in [("1", "8"), ("2", "6")]:
        item_path = _write(tmp_path / f"item{item_id}.json", _board_item(
            item_id, business_id="100", destination="Paris, França",
            hotel_1_name="Hotel X", hotel_1_rating=rating,
        ))
        assert _run(capsys, "--data-root", data_root, "ingest", "--item", item_path) == {
            "success": True, "itemId": item_id
        }

    evaluation = _run(capsys, "--data-root", data_root, "evaluation", "100", "--type", "Convidados")
    assert evaluation["hotels"] == [{"name": "Hotel X", "rating": 7.0}]

    output_dir = tmp_path / "reports"
    distribution = _run(
        capsys, "--data-root", data_root,
        "distribution", "100", "--type", "Convidados", "--output-dir", str(output_dir)
    )
    assert distribution["categories"][0]["totalResponses"] == 2
    assert (output_dir / "distribution_100_convidados.csv").exists()

    suppliers = _run(capsys, "--data-root", data_root, "suppliers", "Paris", "--type", "Hotéis")
    assert suppliers["results"][0]["country"] == "França"


def test_challenge_is_answered(tmp_path, capsys, data_root):
    event = _write(tmp_path / "event.json", {"challenge": "xyz"})

    assert _run(capsys, "--data-root", data_root, "delete", "--event", event) == {"challenge": "xyz"}


def test_not_found_exit_code(capsys, data_root):
    with pytest.raises(SystemExit) as excinfo:
        main.main(["--data-root", data_root, "evaluation", "999", "--type", "Guias"])

    assert excinfo.value.code == 1
    assert "error" in json.loads(capsys.readouterr().out)


def test_invalid_argument_exit_code(capsys, data_root):
    with pytest.raises(SystemExit) as excinfo:
        main.main(["--data-root", data_root, "suppliers", "Paris", "--type", "Aviões"])

    assert excinfo.value.code == 2


def test_key_lookup(tmp_path, capsys, data_root):
    item = _write(tmp_path / "item.json", _board_item("1", business_id="100", seats="9"))
    _run(capsys, "--data-root", data_root, "ingest", "--item", item)

    key_item = _write(tmp_path / "key.json", {"id": "k1", "column_values": [
        {"id": COLUMN_IDS["key_business_id"], "display_value": "100"},
        {"id": COLUMN_IDS["access_key"], "text": "ABC123"},
    ]})
    event = _write(tmp_path / "event.json", {"event": {"pulseId": "k1"}})
    saved = _run(capsys, "--data-root", data_root, "save-key", "--item", key_item, "--event", event)
    assert saved["business_id"] == "100"

    evaluation = _run(capsys, "--data-root", data_root, "key-evaluation", "ABC123")
    assert evaluation["assentos"] == 9.0

    distribution = _run(capsys, "--data-root", data_root, "key-distribution", "ABC123")
    assert distribution["searchId"] == "ABC123"
