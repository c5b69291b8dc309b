"""Menus for the parks demo."""

from dataclasses import replace
from datetime import datetime

from rich.panel import Panel

from keymenu.menu import ConsoleMenu
from keymenu.models import MenuExit, OutcomeCode, SelectionMode
from keymenu.prompts import get_bool, get_string
from keymenu.terminal import Terminal

from .dao import ParkDao
from .models import Park


class DemoMenu(ConsoleMenu):
    """Demo menus share one terminal and a selection mode."""

    def __init__(self, terminal: Terminal | None = None, mode: SelectionMode | None = None):
        super().__init__(terminal)
        self.mode = mode
        if mode is not None:
            self.configure(selection_mode=mode)

    def _banner(self, text: str) -> None:
        self.console.print(Panel(f"[bold]{text}[/bold]", border_style="blue", expand=False))


class MainMenu(DemoMenu):
    def __init__(
        self,
        park_dao: ParkDao,
        terminal: Terminal | None = None,
        mode: SelectionMode | None = None,
    ):
        super().__init__(terminal, mode)
        self.park_dao = park_dao
        (
            self.add_option("Joke Menu", self.show_joke_menu)
            .add_option("Hello World", self.hello_world)
            .add_option("Today", self.show_menu(lambda: TodayMenu(self.terminal, self.mode)))
            .add_option("Parks", self.show_parks_menu)
            .add_option("Close", self.close, "Q")
            .configure(key_string_separator=" | ", beep_on_error=True)
        )

    def on_before_show(self) -> None:
        self._banner("Main Menu")

    def hello_world(self) -> OutcomeCode:
        self.console.print("Hey there, Hello World!")
        return OutcomeCode.WAIT_AFTER_SELECTION

    def show_parks_menu(self) -> MenuExit:
        return ParksMenu(self.park_dao, self.terminal, self.mode).show()

    def show_joke_menu(self) -> MenuExit:
        # Built on the fly rather than as a subclass
        jokes = (
            ConsoleMenu(self.terminal)
            .add_option("Cross the road jokes", self._cross_the_road_joke, "CTR")
            .add_option("Computer jokes", self._computer_joke, "CMP")
            .add_option("Close joke menu", ConsoleMenu.close, "Q")
            .add_option("Exit program", ConsoleMenu.exit, "QQ")
            .configure(selection_mode=SelectionMode.KEY_STRING, selected_foreground="red")
        )
        return jokes.show()

    def _cross_the_road_joke(self) -> OutcomeCode:
        self.console.print(
            "Why did the chicken cross the road, roll in the dirt, and cross the road again?"
        )
        self.terminal.read_key()
        self.console.print("[green]Because he was a dirty double-crosser![/green]")
        return OutcomeCode.WAIT_AFTER_SELECTION

    def _computer_joke(self) -> OutcomeCode:
        self.console.print("How easy is it to count in binary?")
        self.terminal.read_key()
        self.console.print("[green]As easy as 01 10 11.[/green]")
        return OutcomeCode.WAIT_AFTER_SELECTION


class TodayMenu(DemoMenu):
    def __init__(self, terminal: Terminal | None = None, mode: SelectionMode | None = None):
        super().__init__(terminal, mode)
        (
            self.add_option("Forecast", self.display_weather)
            .add_option("Time", self.tell_the_time)
            .add_option("Close", self.close, "Q")
            .add_option("Exit", self.exit, "X")
            .configure(title="*** Today ***")
        )

    def display_weather(self) -> OutcomeCode:
        self.console.print("The weather today is a perfect 85 degrees. Not a cloud in the sky!")
        return OutcomeCode.WAIT_AFTER_SELECTION

    def tell_the_time(self) -> OutcomeCode:
        self.console.print(f"The day and time is {datetime.now():%A %Y-%m-%d %H:%M}")
        return OutcomeCode.WAIT_AFTER_SELECTION


class ParksMenu(DemoMenu):
    """Data-driven: options come from the DAO on every draw."""

    def __init__(
        self,
        park_dao: ParkDao,
        terminal: Terminal | None = None,
        mode: SelectionMode | None = None,
    ):
        super().__init__(terminal, mode)
        self.park_dao = park_dao
        self.configure(key_string_separator=" ... ", selected_background="yellow")

    def on_before_show(self) -> None:
        self._banner("National Parks")

    def rebuild_options(self) -> None:
        self.clear_options()
        self.add_option_range(
            self.park_dao.get_list(),
            self.show_park_menu,
            text_formatter=format_park,
            key_formatter=lambda p: str(p.park_id),
        ).add_option("Close", self.close, "Q")

    def show_park_menu(self, park: Park) -> MenuExit:
        return ParkMenu(self.park_dao, park, self.terminal, self.mode).show()


class ParkMenu(DemoMenu):
    def __init__(
        self,
        park_dao: ParkDao,
        park: Park,
        terminal: Terminal | None = None,
        mode: SelectionMode | None = None,
    ):
        super().__init__(terminal, mode)
        self.park_dao = park_dao
        self.park = park
        (
            self.add_option("Update Park", self.update_park, "U")
            .add_option("Delete Park", self.delete_park, "D")
            .add_option("Quit", self.close, "Q")
            .configure(key_string_separator=") ", selected_foreground="green")
        )

    def on_before_show(self) -> None:
        self.console.print(f"Id: {self.park.park_id}")
        self.console.print(f"Name: {self.park.name}")
        self.console.print(f"State: {self.park.state}")
        self.console.print()

    def on_after_show(self) -> None:
        self.console.print(f"[red]--- Today's weather at {self.park.name} is 69F and sunny ---[/red]")

    def update_park(self) -> OutcomeCode:
        """Blank answers cancel the edit."""
        name = get_string("Name:", allow_empty=True, terminal=self.terminal)
        if not name:
            return OutcomeCode.DO_NOT_WAIT_AFTER_SELECTION
        state = get_string("State:", allow_empty=True, terminal=self.terminal)
        if not state:
            return OutcomeCode.DO_NOT_WAIT_AFTER_SELECTION

        self.park_dao.update(replace(self.park, name=name, state=state))
        self.console.print("Park was updated.")
        return OutcomeCode.WAIT_THEN_CLOSE_MENU

    def delete_park(self) -> OutcomeCode:
        if not get_bool(
            f"Are you sure you want to delete {self.park.name}?",
            default=False,
            terminal=self.terminal,
        ):
            return OutcomeCode.DO_NOT_WAIT_AFTER_SELECTION

        self.park_dao.delete(self.park.park_id)
        self.console.print("Park was deleted.")
        return OutcomeCode.WAIT_THEN_CLOSE_MENU


def format_park(park: Park) -> str:
    return f"{park.name.upper()}, {park.state}"


def run_demo(
    mode: SelectionMode = SelectionMode.ARROW,
    terminal: Terminal | None = None,
    park_dao: ParkDao | None = None,
) -> MenuExit:
    """Show the demo's main menu until it is closed."""
    return MainMenu(park_dao or ParkDao(), terminal, mode).show()
