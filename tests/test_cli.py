import json

import pytest

import snapguide.__main__ as cli


def _write_scene(tmp_path):
    scene_path = tmp_path / "scene.json"
    scene_path.write_text(
        json.dumps(
            {
                "viewport": {"x": 0, "y": 0, "width": 400, "height": 400},
                "elements": [
                    {"id": "a", "kind": "image", "x": 0, "y": 0, "width": 100, "height": 100},
                    {"id": "b", "kind": "image", "x": 0, "y": 200, "width": 10, "height": 10},
                    {"id": "d", "kind": "image", "x": 300, "y": 300, "width": 50, "height": 50},
                ],
            }
        ),
        encoding="utf-8",
    )
    return scene_path


def test_main_reports_corrected_point(tmp_path, capsys):
    scene_path = _write_scene(tmp_path)

    cli.main([str(scene_path), "--drag", "d", "--to", "97,97", "--config", '{"detectionRadius": 5}'])

    report = json.loads(capsys.readouterr().out)
    assert report["proposed"] == {"x": 97.0, "y": 97.0}
    assert report["corrected"] == {"x": 100.0, "y": 100.0}
    assert report["snapped"] is True
    assert {g["position"] for g in report["guidelines"]} == {100.0}
    assert report["distance_guidelines"] == []
    assert report["notifications"] == 1
    assert "projections" not in report


def test_main_without_snap(tmp_path, capsys):
    scene_path = _write_scene(tmp_path)

    cli.main([str(scene_path), "--drag", "d", "--to", "250,130"])

    report = json.loads(capsys.readouterr().out)
    assert report["corrected"] == report["proposed"]
    assert report["snapped"] is False
    assert report["notifications"] == 0


def test_main_selection_and_projections(tmp_path, capsys):
    scene_path = _write_scene(tmp_path)

    cli.main(
        [
            str(scene_path),
            "--selection",
            "b:image",
            "--selection",
            "d:image",
            "--to",
            "101,250",
            "--projections",
        ]
    )

    report = json.loads(capsys.readouterr().out)
    assert report["corrected"] == {"x": 100.0, "y": 250.0}
    assert len(report["projections"]) == 30
    assert not any(p["is_moving"] for p in report["projections"])


def test_main_missing_scene_exits(tmp_path, caplog):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(tmp_path / "missing.json"), "--drag", "d", "--to", "0,0"])
    assert excinfo.value.code == 1
    assert "Cannot load scene" in caplog.text


def test_main_requires_dragged_element(tmp_path):
    scene_path = _write_scene(tmp_path)
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(scene_path), "--to", "0,0"])
    assert excinfo.value.code == 2


def test_main_rejects_bad_point(tmp_path):
    scene_path = _write_scene(tmp_path)
    with pytest.raises(SystemExit):
        cli.main([str(scene_path), "--drag", "d", "--to", "nowhere"])


def test_main_malformed_scene_exits(tmp_path, caplog):
    scene_path = tmp_path / "scene.json"
    scene_path.write_text(
        json.dumps({"elements": [{"id": "p", "kind": "path", "points": [[None, 1]]}]}),
        encoding="utf-8",
    )
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(scene_path), "--drag", "p", "--kind", "path", "--to", "0,0"])
    assert excinfo.value.code == 1
    assert "missing 'x'" in caplog.text
