"""Unit tests for cli.output module."""

from unittest.mock import Mock, patch

from src.cli.output import OutputHandler
from src.models import Space


class TestOutputHandlerInit:
    """Test cases for OutputHandler initialization."""

    def test_init_default_verbosity_and_color(self):
        """Initialize with default verbosity (0) and color enabled."""
        handler = OutputHandler()

        assert handler.verbosity == 0
        assert handler.console is not None
        assert handler.err_console is not None
        assert handler.console.no_color is False

    def test_init_no_color_true(self):
        """Initialize with no_color=True disables colors on both consoles."""
        handler = OutputHandler(no_color=True)

        assert handler.console.no_color is True
        assert handler.err_console.no_color is True

    def test_messages_go_to_stderr(self):
        handler = OutputHandler()

        assert handler.err_console.stderr is True
        assert handler.console.stderr is False


class TestOutputHandlerMessages:
    """Test cases for status messages."""

    @patch('src.cli.output.Console')
    def test_success_displays_green_message(self, mock_console_class):
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        OutputHandler().success("Page created")

        printed = mock_console.print.call_args[0][0]
        assert "[green]✓[/green]" in printed
        assert "Page created" in printed

    @patch('src.cli.output.Console')
    def test_error_displays_red_message(self, mock_console_class):
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        OutputHandler().error("Content not found: 123")

        args, kwargs = mock_console.print.call_args
        assert "[red]✗[/red]" in args[0]
        assert "Content not found: 123" in args[0]
        assert kwargs["style"] == "red"

    @patch('src.cli.output.Console')
    def test_error_escapes_markup_in_message(self, mock_console_class):
        """Brackets in service messages are not treated as Rich markup."""
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        OutputHandler().error("Invalid CQL near [bold]")

        assert "\\[bold]" in mock_console.print.call_args[0][0]

    @patch('src.cli.output.Console')
    def test_warning_displays_yellow_message(self, mock_console_class):
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        OutputHandler().warning("Careful")

        assert "[yellow]⚠[/yellow]" in mock_console.print.call_args[0][0]

    @patch('src.cli.output.Console')
    def test_info_displays_at_verbosity_1(self, mock_console_class):
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        OutputHandler(verbosity=1).info("Fetching")

        mock_console.print.assert_called_once_with("Fetching")

    @patch('src.cli.output.Console')
    def test_info_does_not_display_at_verbosity_0(self, mock_console_class):
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        OutputHandler(verbosity=0).info("Fetching")

        mock_console.print.assert_not_called()

    @patch('src.cli.output.Console')
    def test_debug_displays_at_verbosity_2(self, mock_console_class):
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        OutputHandler(verbosity=2).debug("GET rest/api/space")

        mock_console.print.assert_called_once_with("[dim]GET rest/api/space[/dim]")

    @patch('src.cli.output.Console')
    def test_debug_does_not_display_at_verbosity_1(self, mock_console_class):
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        OutputHandler(verbosity=1).debug("GET rest/api/space")

        mock_console.print.assert_not_called()


class TestOutputHandlerResults:
    """Test cases for result output."""

    @patch('src.cli.output.Console')
    def test_print_disables_markup(self, mock_console_class):
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        OutputHandler().print("# Title [draft]")

        mock_console.print.assert_called_once_with("# Title [draft]", markup=False, soft_wrap=True)

    @patch('src.cli.output.Console')
    def test_print_json(self, mock_console_class):
        mock_console = Mock()
        mock_console_class.return_value = mock_console

        OutputHandler(no_color=True).print_json({"id": "1"})

        mock_console.print_json.assert_called_once_with(data={"id": "1"}, indent=2, highlight=False)

    @patch('src.cli.output.Console')
    def test_print_spaces_table(self, mock_console_class):
        mock_console = Mock()
        mock_console_class.return_value = mock_console
        spaces = [Space('1', 'TEAM', 'Team', 'global', 'current')]

        OutputHandler().print_spaces_table(spaces)

        table = mock_console.print.call_args[0][0]
        assert table.row_count == 1
        assert [column.header for column in table.columns] == ["Key", "Name", "Type", "Status"]


class TestOutputHandlerSpinner:
    """Test cases for spinner."""

    @patch('src.cli.output.Live')
    @patch('src.cli.output.Spinner')
    def test_spinner_creates_live_spinner(self, mock_spinner_class, mock_live_class):
        handler = OutputHandler()

        with handler.spinner("Working..."):
            pass

        mock_spinner_class.assert_called_once_with("dots", text="Working...")
        live_kwargs = mock_live_class.call_args.kwargs
        assert live_kwargs["console"] is handler.err_console
        assert live_kwargs["transient"] is True
