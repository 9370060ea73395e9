import pytest
from pymongo.errors import AutoReconnect

import sucoi.scripts.clear_goals as clear_goals_script
from sucoi.scripts.clear_goals import clear_goals, confirm
from sucoi.src.core.errors import DatabaseConnectionError


async def test_clear_goals_removes_every_goal(database):
    await database.goals.insert_many([
        {"username": "maya", "taskId": 1, "day": "Monday", "taskText": "Walk", "taskDone": False},
        {"username": "noa", "taskId": 1, "day": "Monday", "taskText": "Read", "taskDone": True},
    ])
    await database.users.insert_one({"email": "maya@example.com", "password": "pw"})

    removed = await clear_goals(database)

    assert removed == 2
    assert await database.goals.count_documents({}) == 0
    assert await database.users.count_documents({}) == 1


async def test_clear_goals_on_empty_collection(database):
    assert await clear_goals(database) == 0


@pytest.mark.parametrize("answer, expected", [("y", True), ("YES ", True), ("", False), ("n", False)])
def test_confirm(answer, expected):
    assert confirm(lambda prompt: answer) is expected


@pytest.mark.parametrize("error", [
    DatabaseConnectionError("Could not connect to MongoDB"),
    AutoReconnect("connection reset during delete"),
])
def test_main_exits_with_1_on_database_errors(monkeypatch, error):
    async def failing_run(settings):
        raise error

    monkeypatch.setattr(clear_goals_script, "_run", failing_run)
    assert clear_goals_script.main(["--yes"]) == 1


def test_main_aborts_without_confirmation(monkeypatch):
    async def unexpected_run(settings):
        raise AssertionError("goals must not be cleared")

    monkeypatch.setattr(clear_goals_script, "_run", unexpected_run)
    monkeypatch.setattr(clear_goals_script, "confirm", lambda: False)
    assert clear_goals_script.main([]) == 0
