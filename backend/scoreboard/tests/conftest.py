import pytest

from scoreboard.logic.controller import GameController
from scoreboard.logic.settings import GameSettings
from shared.storage import InMemorySnapshotStorage


@pytest.fixture
def settings():
    return GameSettings()


@pytest.fixture
def storage():
    return InMemorySnapshotStorage()


@pytest.fixture
def controller(settings, storage):
    return GameController(settings, storage)


@pytest.fixture
def active_controller(controller):
    """Controller with Ann and Bo registered and the game started."""
    controller.add_player("Ann")
    controller.add_player("Bo")
    controller.start_game()
    return controller
