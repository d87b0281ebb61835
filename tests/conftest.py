import pytest
from fastapi.testclient import TestClient

from unitylog import config


def editor_block(message, call="Log", frames=("Game.Player:Start () (at Assets/Scripts/Player.cs:12)",)):
    """Build one Editor-style log statement."""
    lines = [message, f"UnityEngine.Debug:{call} (object)"]
    lines.extend(frames)
    return "\n".join(lines)


@pytest.fixture(autouse=True)
def fresh_settings():
    config.reset_settings()
    yield
    config.reset_settings()


@pytest.fixture
def editor_log():
    blocks = [
        editor_block("Hello World"),
        editor_block(
            "Missing reference",
            call="LogWarning",
            frames=(
                "Game.Logger:Warn (string) (at Assets/Scripts/Logger.cs:20)",
                "Game.Enemy:Update () (at Assets/Scripts/Enemy.cs:40)",
            ),
        ),
        editor_block("Hello World", frames=("Game.Menu:Open () (at Assets/Scripts/Menu.cs:5)",)),
        editor_block(
            "NullReferenceException thrown",
            call="LogError",
            frames=(
                "Game.Player:Die () (at Assets/Scripts/Player.cs:80)",
                "Game.Player:Update () (at Assets/Scripts/Player.cs:30)",
                "Game.Loop:Tick () (at Assets/Scripts/Loop.cs:9)",
                "Game.Loop:Run () (at Assets/Scripts/Loop.cs:3)",
            ),
        ),
    ]
    return "\n\n".join(blocks) + "\n\n"


@pytest.fixture
def player_log():
    return (
        "Initialize engine version: 2021.3.5f1\n"
        "GfxDevice: creating device client\n"
        "\n"
        "Begin MonoManager ReloadAssembly\n"
        "- Completed reload, in  0.091 seconds\n"
        "\n"
        "SingleLine\n"
        "\n"
    )


@pytest.fixture
def client():
    from app import app
    return TestClient(app)
