import pytest
import yaml

from pandasuites.common.global_config import ConfigLoader, ConfigurationError
from pandasuites.ui_testing.framework.ui_config import UIConfig

UI_ENV_KEYS = ("UI_BASE_URL", "UI_BROWSER", "UI_HEADLESS", "UI_EXPLICIT_WAIT", "UI_POLL_INTERVAL")


@pytest.fixture(autouse=True)
def _isolated_loader(monkeypatch):
    for key in UI_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


def write_config(tmp_path, data):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump(data), encoding="utf-8")
    return config_path


def test_env_override_and_defaults(monkeypatch, tmp_path):
    config_path = write_config(tmp_path, {"ui": {"base_url": "https://example.com/", "explicit_wait": 20}})

    loader = ConfigLoader(config_path=config_path)
    assert loader.get("ui.base_url") == "https://example.com/"
    assert loader.get("ui.poll_interval", 0.5) == 0.5

    ConfigLoader.reset()
    monkeypatch.setenv("UI_BASE_URL", "https://staging.example.com/")
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("ui.base_url") == "https://staging.example.com/"


def test_reload_updates_values(tmp_path):
    config_path = write_config(tmp_path, {"ui": {"explicit_wait": 5}})

    loader = ConfigLoader(config_path=config_path)
    assert loader.get("ui.explicit_wait") == 5

    config_path.write_text(yaml.dump({"ui": {"explicit_wait": 15}}), encoding="utf-8")
    loader.reload()
    assert loader.get("ui.explicit_wait") == 15


def test_missing_explicit_config_file(tmp_path):
    with pytest.raises(ConfigurationError):
        ConfigLoader(config_path=tmp_path / "missing.yaml")


def test_invalid_yaml(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("ui: [unclosed", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigLoader(config_path=config_path)


def test_ui_config_from_file_and_env(monkeypatch, tmp_path):
    config_path = write_config(tmp_path, {
        "ui": {
            "base_url": "https://automationpanda.com/",
            "browser": "chromium",
            "headless": True,
            "explicit_wait": 20,
            "viewport": {"width": 1280, "height": 720},
        },
    })
    monkeypatch.setenv("UI_BROWSER", "Firefox")
    monkeypatch.setenv("UI_HEADLESS", "false")

    config = UIConfig.from_loader(ConfigLoader(config_path=config_path))

    assert config.browser == "firefox"
    assert config.headless is False
    assert config.explicit_wait == 20
    assert config.poll_interval == 0.5
    assert config.viewport == {"width": 1280, "height": 720}
    assert config.browser_target() == ("firefox", None)


@pytest.mark.parametrize("value", ["-1", "0", "soon"])
def test_timeouts_must_be_positive_numbers(monkeypatch, tmp_path, value):
    config_path = write_config(tmp_path, {"ui": {}})
    monkeypatch.setenv("UI_EXPLICIT_WAIT", value)

    with pytest.raises(ConfigurationError, match="ui.explicit_wait"):
        UIConfig.from_loader(ConfigLoader(config_path=config_path))


@pytest.mark.parametrize(
    "browser, target",
    [
        ("chromium", ("chromium", None)),
        ("chrome", ("chromium", "chrome")),
        ("edge", ("chromium", "msedge")),
        ("webkit", ("webkit", None)),
    ],
)
def test_browser_targets(browser, target):
    assert UIConfig(browser=browser).browser_target() == target


def test_unsupported_browser():
    with pytest.raises(ConfigurationError, match="Unsupported browser: 'opera'"):
        UIConfig(browser="opera").browser_target()
