from keplog.commands.config.settings import display_config, prompt_value
from keplog.utils.config_store import KeplogConfig


def test_prompt_value_returns_stripped_answer(mocker):
    mocker.patch("typer.prompt", return_value="  proj-1 ")

    assert prompt_value("Project ID") == "proj-1"


def test_prompt_value_repeats_until_required_value(mocker):
    ask = mocker.patch(
        "typer.prompt", side_effect=["", "   ", "proj-1"]
    )
    error = mocker.patch("keplog.commands.config.settings.error")

    assert prompt_value("Project ID") == "proj-1"
    assert ask.call_count == 3
    assert error.call_count == 2
    error.assert_called_with("Project ID is required")


def test_prompt_value_optional_allows_empty(mocker):
    mocker.patch("typer.prompt", return_value="")

    assert prompt_value("Project name (optional)", required=False) == ""


def test_prompt_value_hides_secret_default(mocker):
    ask = mocker.patch("typer.prompt", return_value="k")

    prompt_value("API Key", default="kep_existing", secret=True)

    kwargs = ask.call_args.kwargs
    assert kwargs["hide_input"] is True
    assert kwargs["show_default"] is False
    assert kwargs["default"] == "kep_existing"


def test_display_config_masks_api_key(mocker):
    panel = mocker.patch("keplog.commands.config.settings.display_panel")

    display_config(
        KeplogConfig(project_id="p", api_key="kep_secret_value", api_url="https://u"),
        "local",
    )

    content = panel.call_args[0][0]
    assert "kep_secret_value" not in content
    assert "API Key: ****************..." in content
    assert "Source: local" in content


def test_display_config_warns_when_empty(mocker):
    mocker.patch("keplog.commands.config.settings.display_panel")
    warning = mocker.patch("keplog.commands.config.settings.warning")

    display_config(KeplogConfig(api_url="https://api.keplog.io"), "environment")

    warning.assert_called_once()
