import pytest

from usdviewkit.stage_loader import (
    BooleanParameter,
    FilePathParameter,
    LoadStageNode,
    StringParameter,
    process_with_parameters,
)


@pytest.fixture
def usd_file(tmp_path):
    path = tmp_path / "scene.usda"
    path.write_text("#usda 1.0\n")
    return str(path)


def test_empty_path_gives_empty_stage():
    assert process_with_parameters("", False, True, "") == ["Empty USD Stage"]


def test_missing_file_gives_invalid_stage(tmp_path):
    missing = str(tmp_path / "absent.usd")
    assert process_with_parameters(missing, False, True, "") == ["Invalid USD Stage"]


def test_existing_file_loads(usd_file):
    assert process_with_parameters(usd_file, False, True, "") == [f"USDScene:file://{usd_file}"]


def test_default_parameters():
    params = dict(LoadStageNode().get_parameters())
    assert params["file_path"] == FilePathParameter("", "USD Files (*.usd *.usda *.usdc *.usdz)")
    assert params["auto_reload"] == BooleanParameter(False)
    assert params["load_payloads"] == BooleanParameter(True)
    assert params["population_mask"] == StringParameter("")


def test_parameters_round_trip():
    source = LoadStageNode(file_path="a.usd", auto_reload=True, load_payloads=False, population_mask="/World/*")
    target = LoadStageNode()
    target.set_parameters(source.get_parameters())
    assert target.get_parameters() == source.get_parameters()


def test_mismatched_and_unknown_parameters_ignored():
    node = LoadStageNode()
    node.set_parameters([
        ("auto_reload", StringParameter("yes")),
        ("file_path", BooleanParameter(True)),
        ("unknown", StringParameter("x")),
    ])
    assert node.auto_reload is False
    assert node.file_path == ""


def test_process_uses_own_parameters(usd_file):
    node = LoadStageNode(file_path=usd_file)
    assert node.process(["ignored"]) == [f"USDScene:file://{usd_file}"]


def test_refresh_without_file():
    node = LoadStageNode()
    assert node.refresh() is False
    assert node.last_execution_result is None


def test_refresh_loads_once(usd_file):
    node = LoadStageNode(file_path=usd_file)
    assert node.refresh() is True
    assert node.last_execution_result == f"USDScene:file://{usd_file}"
    assert node.refresh() is False


def test_select_file_clears_result(usd_file, tmp_path):
    node = LoadStageNode(file_path=usd_file)
    node.refresh()
    other = tmp_path / "other.usd"
    other.write_text("")
    node.select_file(str(other))
    assert node.last_execution_result is None
    assert node.refresh() is True
    assert node.last_execution_result == f"USDScene:file://{other}"