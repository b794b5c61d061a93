import json

from bidcompare.cli import main


BIDS_YAML = """
- id: A
  shipper: {name: Alpha}
  price: 500
  line_items:
    - {category: Packing, description: Crate, unit_price: 500, quantity: 1}
- id: B
  shipper: {name: Beta}
  price: 700
  line_items:
    - {category: Packing, description: Crate, unit_price: 600, quantity: 1}
    - {category: Insurance, description: Coverage, unit_price: 50, is_optional: true}
- id: C
  shipper: {name: Gamma}
  price: 900
  line_items: []
"""


def _write_inputs(tmp_path, output_format="table"):
    bids_path = tmp_path / "bids.yaml"
    bids_path.write_text(BIDS_YAML, encoding="utf-8")
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        f"paths:\n  bids: bids.yaml\noutput:\n  format: {output_format}\n",
        encoding="utf-8",
    )
    return config_path, bids_path


def test_cli_prints_summary_and_matrix(tmp_path, capsys):
    config_path, _ = _write_inputs(tmp_path)
    exit_code = main(["--config", str(config_path)])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Bid summary:" in out
    assert "Line item comparison:" in out
    assert "Crate" in out
    assert "50.00 (optional)" in out


def test_cli_json_output_with_overrides(tmp_path, capsys):
    config_path, _ = _write_inputs(tmp_path)
    exit_code = main(["--config", str(config_path), "--format", "json", "--exclude-optional", "--flat"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["metadata"]["include_optional"] is False
    assert payload["metadata"]["group_by_category"] is False
    assert [entry["row"]["description"] for entry in payload["display"]] == ["Crate"]


def test_cli_uses_defaults_without_config(tmp_path, capsys):
    _, bids_path = _write_inputs(tmp_path)
    exit_code = main(
        ["--config", str(tmp_path / "missing.yaml"), "--bids", str(bids_path), "--no-summary"]
    )

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Bid summary:" not in out
    assert "Coverage" in out


def test_cli_reports_missing_config(tmp_path):
    assert main(["--config", str(tmp_path / "missing.yaml")]) == 1


def test_cli_reports_missing_bid_file(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("paths:\n  bids: nowhere.yaml\n", encoding="utf-8")
    assert main(["--config", str(config_path)]) == 1


def test_cli_no_matching_rows(tmp_path, capsys):
    config_path, _ = _write_inputs(tmp_path)
    bids_path = tmp_path / "bids.yaml"
    bids_path.write_text(
        "- id: A\n  line_items:\n    - {description: Crate, unit_price: 5, is_optional: true}\n",
        encoding="utf-8",
    )
    exit_code = main(["--config", str(config_path), "--exclude-optional"])

    assert exit_code == 0
    assert "No services match the current filters." in capsys.readouterr().out
