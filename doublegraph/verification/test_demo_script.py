import json

from doublegraph.scripts import run_linearisation_demo


def test_demo_prints_a_full_ordering(capsys):
    run_linearisation_demo.main()
    data = json.loads(capsys.readouterr().out)

    assert data["is_connected"] is True
    assert data["n_ccs"] == 1
    assert sorted(data["linear_order"]) == sorted(run_linearisation_demo.demo_adjacency())
    assert data["report"]["cost"] < data["random_baseline_cost"]
