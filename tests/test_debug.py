import logging

import pytest

from connectfour.debug import DebugManager, DebugLevel


@pytest.fixture
def manager():
    m = DebugManager(level=DebugLevel.INFO)
    yield m
    m.configure(log_file="")


def test_levels_filter_messages(manager, caplog):
    with caplog.at_level(logging.DEBUG, logger="connectfour"):
        manager.info("shown")
        manager.debug("hidden")
    assert "shown" in caplog.text
    assert "hidden" not in caplog.text


def test_components_filter_messages(manager, caplog):
    manager.configure(components=["game"])
    with caplog.at_level(logging.DEBUG, logger="connectfour"):
        manager.info("from game", "game")
        manager.info("from board", "board")
    assert "[game] from game" in caplog.text
    assert "from board" not in caplog.text


def test_disabled_manager_is_silent(manager, caplog):
    manager.configure(enabled=False)
    with caplog.at_level(logging.DEBUG, logger="connectfour"):
        manager.warning("nothing")
    assert "nothing" not in caplog.text


def test_set_from_string(manager):
    assert manager.set_from_string("Trace")
    assert manager.level == DebugLevel.TRACE
    assert not manager.set_from_string("loud")
    assert manager.level == DebugLevel.TRACE


def test_timers(manager):
    manager.start_timer("work")
    elapsed = manager.end_timer("work")
    assert elapsed is not None and elapsed >= 0
    assert manager.end_timer("work") is None


def test_log_file(manager, tmp_path):
    path = tmp_path / "game.log"
    manager.configure(log_file=str(path))
    assert manager.log_file == str(path)
    manager.warning("written to file", "cli")
    manager.configure(log_file="")
    assert manager.log_file is None
    assert "[cli] written to file" in path.read_text()
