import keplog.utils.console as console_utils


def test_success_prints(mocker):
    mock_print = mocker.patch.object(console_utils.console, "print")
    console_utils.success("ok")
    mock_print.assert_called_once()


def test_error_prints(mocker):
    mock_print = mocker.patch.object(console_utils.console, "print")
    console_utils.error("fail")
    mock_print.assert_called_once()


def test_warning_prints(mocker):
    mock_print = mocker.patch.object(console_utils.console, "print")
    console_utils.warning("warn")
    mock_print.assert_called_once()


def test_info_prints(mocker):
    mock_print = mocker.patch.object(console_utils.console, "print")
    console_utils.info("hello")
    mock_print.assert_called_once()


def test_hint_is_dimmed(mocker):
    mock_print = mocker.patch.object(console_utils.console, "print")
    console_utils.hint("example")
    mock_print.assert_called_once_with("example", style="dim")


def test_header_surrounds_title_with_blank_lines(mocker):
    mock_print = mocker.patch.object(console_utils.console, "print")
    console_utils.header("Title")
    assert mock_print.call_count == 3


def test_create_table():
    table = console_utils.create_table("Title", ["a", "b"])
    assert table.title == "Title"
    assert len(table.columns) == 2


def test_display_panel(mocker):
    mock_print = mocker.patch.object(console_utils.console, "print")
    console_utils.display_panel("content", "title")
    mock_print.assert_called_once()
