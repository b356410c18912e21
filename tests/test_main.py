import main


def test_task1_output(capsys):
    main.main(["main.py", "task1"])
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "&-=-& start-task1",
        "&-=-& empty-queue",
        "ok=False size=0",
        "&-=-& insert_head",
        "after-insert: [c b a] size=3",
        "&-=-& remove_head",
        "ok=True removed=c",
        "ok=True removed=b",
        "after-remove: [a] size=1",
        "&-=-& free",
        "size=0",
    ]


def test_task2_output(capsys):
    main.main(["main.py", "task2"])
    out = capsys.readouterr().out
    assert "after-reverse: [a b c] size=3" in out
    assert "after-remove: [c] size=1" in out


def test_task3_output(capsys):
    main.main(["main.py", "task3"])
    out = capsys.readouterr().out.splitlines()
    assert "after-sort: [Apple banana cherry2 cherry10] size=4" in out
    assert "after-sort: [Apple banana cherry10 cherry2] size=4" in out


def test_task4_frees_everything(capsys, monkeypatch):
    monkeypatch.setenv("QUEUE_FAIL_PROBABILITY", "0.3")
    monkeypatch.setenv("QUEUE_SEED", "11")
    main.main(["main.py", "task4"])
    out = capsys.readouterr().out.splitlines()
    assert out[-1].startswith("live=0 ")


def test_runs_all_tasks(capsys):
    assert main.main(["main.py"]) == 0
    out = capsys.readouterr().out
    for n in range(1, 5):
        assert f"start-task{n}" in out
