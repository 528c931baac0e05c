from history import History


def test_fresh_commit_discards_redo_branch():
    history = History("s0")
    history.commit("s1")
    history.commit("s2")
    history.undo()
    history.commit("s3")
    assert history.current() == "s3"
    assert history.redo() is False
    assert history.current() == "s3"
    assert len(history) == 3


def test_overwrite_commits_do_not_grow_history():
    history = History("initial")
    history.commit("base")
    for step in range(10):
        history.commit(f"drag-{step}", overwrite=True)
    assert len(history) == 2
    assert history.current() == "drag-9"
    history.undo()
    assert history.current() == "initial"


def test_undo_and_redo_stop_at_bounds():
    history = History(0)
    assert history.undo() is False
    assert history.current() == 0
    history.commit(1)
    assert history.redo() is False
    assert history.undo() is True
    assert history.undo() is False
    assert history.redo() is True
    assert history.current() == 1


def test_commit_accepts_an_updater():
    history = History([1])
    history.commit(lambda state: state + [2])
    assert history.current() == [1, 2]
    history.commit(lambda state: state + [3], overwrite=True)
    assert history.current() == [1, 2, 3]
    assert len(history) == 2


def test_cursor_flags():
    history = History("a")
    assert not history.can_undo
    assert not history.can_redo
    history.commit("b")
    assert history.can_undo
    history.undo()
    assert history.can_redo
    assert history.cursor == 0
