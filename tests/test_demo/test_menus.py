"""Scripted walks through the parks demo."""

from readchar import key

from keymenu.demo.dao import ParkDao
from keymenu.demo.menus import MainMenu, ParksMenu, format_park, run_demo
from keymenu.models import MenuExit, SelectionMode


def test_format_park():
    park = ParkDao().get(2)
    assert format_park(park) == "ACADIA, Maine"


def test_delete_park_in_key_string_mode(make_terminal):
    # Parks -> Acadia -> Delete -> confirm, pause, Close parks, Close main
    term = make_terminal(keys=["x"], lines=["4", "2", "d", "y", "q", "Q"])
    dao = ParkDao()

    result = run_demo(SelectionMode.KEY_STRING, terminal=term, park_dao=dao)

    assert result is MenuExit.CLOSED
    assert [p.name for p in dao.get_list()] == ["Cuyahoga Valley", "Yosemite"]
    assert "Park was deleted." in term.text
    assert "2 ... ACADIA, Maine" in term.text
    assert term.pauses == 1


def test_cancelled_delete_keeps_park(make_terminal):
    term = make_terminal(lines=["1", "d", "", "q", "q"])
    dao = ParkDao()
    ParksMenu(dao, term, SelectionMode.KEY_STRING).show()
    assert len(dao.get_list()) == 3


def test_update_park_shows_new_name(make_terminal):
    term = make_terminal(keys=["x"], lines=["3", "u", "Yosemite Valley", "CA", "q"])
    dao = ParkDao()
    ParksMenu(dao, term, SelectionMode.KEY_STRING).show()
    assert str(dao.get(3)) == "Yosemite Valley, CA"
    assert "YOSEMITE VALLEY, CA" in term.text


def test_blank_name_cancels_update(make_terminal):
    term = make_terminal(lines=["3", "u", "", "q", "q"])
    dao = ParkDao()
    ParksMenu(dao, term, SelectionMode.KEY_STRING).show()
    assert str(dao.get(3)) == "Yosemite, California"


def test_exit_from_today_menu_closes_everything(make_terminal):
    term = make_terminal(lines=["3", "x"])
    assert run_demo(SelectionMode.KEY_STRING, terminal=term) is MenuExit.EXIT_ALL


def test_joke_menu_exit_program(make_terminal):
    term = make_terminal(lines=["1", "qq"])
    assert run_demo(SelectionMode.KEY_STRING, terminal=term) is MenuExit.EXIT_ALL


def test_hello_world_waits(make_terminal):
    term = make_terminal(keys=["x"], lines=["2", "q"])
    run_demo(SelectionMode.KEY_STRING, terminal=term)
    assert "Hey there, Hello World!" in term.text
    assert term.pauses == 1


def test_arrow_mode_close(make_terminal):
    term = make_terminal(keys=[key.UP, key.ENTER])
    menu = MainMenu(ParkDao(), term, SelectionMode.ARROW)
    assert menu.show() is MenuExit.CLOSED
    assert "Main Menu" in term.text
